# directory_app/components/profile_editor.py
"""
Profile editor (modal form) for the signed-in visitor's own profile.

Flow on submit:
- required fields present, otherwise refuse without any network call
- re-resolve the identity; anonymous -> "Please sign in first", no store call
- existing profile -> update keyed by user_id (updated_at = submission time)
- no profile yet   -> insert with user_id; the store assigns id + created_at
- success -> notice + completion callback (the page closes us and refreshes)
- store failure -> logged, generic notice, draft kept for a retry

There is no duplicate-submission guard: the store owns user_id uniqueness.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, List, Mapping, Optional

from directory_app.errors import DraftValidationError, StoreError
from directory_app.store_client import StoreClient
from directory_app.store_client.models import Notice, Participant, ProfileFields

logger = logging.getLogger("participant-directory.profile_editor")

SIGN_IN_NOTICE = "Please sign in first"
SAVED_NOTICE = "Profile saved successfully!"
FAILED_NOTICE = "Failed to save profile"

TEXT_FIELDS = ("name", "university", "email", "project_idea")
LIST_FIELDS = ("skills", "ai_interests")
REQUIRED_FIELDS = ("name", "university", "email", "graduation_year", "skills")

OnSave = Callable[[], Awaitable[None]]


def split_comma_list(text: Optional[str]) -> List[str]:
    """
    "Python, React" -> ["Python", "React"]; "" -> [""] (kept as observed).
    """
    return [item.strip() for item in (text or "").split(",")]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def empty_draft(year: Optional[int] = None) -> ProfileFields:
    return ProfileFields(graduation_year=year or _utcnow().year)


class ProfileEditor:
    def __init__(
        self,
        store: StoreClient,
        access_token: Optional[str] = None,
        current_user: Optional[Participant] = None,
        on_save: Optional[OnSave] = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._store = store
        self._access_token = access_token
        self._on_save = on_save
        self._clock = clock

        self.current_user = current_user
        self.draft = (
            ProfileFields.from_participant(current_user)
            if current_user is not None
            else empty_draft(clock().year)
        )
        self.is_open = True
        self.notice: Optional[Notice] = None
        self._has_profile = current_user is not None

    # ------------------------------------------------------------------
    # Mode
    # ------------------------------------------------------------------
    @property
    def mode(self) -> str:
        return "edit" if self._has_profile else "create"

    @property
    def title(self) -> str:
        return "Edit Profile" if self._has_profile else "Create Profile"

    # ------------------------------------------------------------------
    # Field updates (one call per change event)
    # ------------------------------------------------------------------
    def _set(self, field: str, value: Any) -> None:
        self.draft = self.draft.model_copy(update={field: value})

    def set_text(self, field: str, value: Optional[str]) -> None:
        if field not in TEXT_FIELDS:
            raise KeyError(field)
        self._set(field, value or "")

    def set_list_input(self, field: str, text: Optional[str]) -> None:
        if field not in LIST_FIELDS:
            raise KeyError(field)
        self._set(field, split_comma_list(text))

    def set_graduation_year(self, raw: Any) -> None:
        try:
            year = int(str(raw).strip())
        except (TypeError, ValueError):
            raise DraftValidationError("graduation_year", "Graduation year must be a whole number")
        self._set("graduation_year", year)

    def list_input_value(self, field: str) -> str:
        return ", ".join(getattr(self.draft, field))

    def apply_form(self, form: Mapping[str, Any]) -> None:
        """
        Apply every submitted field present in `form`.

        List fields accept comma-separated text or an already split list.
        graduation_year goes last so a bad year leaves the other edits applied.
        """
        for field in TEXT_FIELDS:
            if field in form:
                self.set_text(field, form[field])
        for field in LIST_FIELDS:
            if field not in form:
                continue
            value = form[field]
            if isinstance(value, (list, tuple)):
                self._set(field, [str(v).strip() for v in value])
            else:
                self.set_list_input(field, value)
        if "graduation_year" in form:
            self.set_graduation_year(form["graduation_year"])

    def missing_fields(self) -> List[str]:
        missing: List[str] = []
        for field in REQUIRED_FIELDS:
            value = getattr(self.draft, field)
            if field == "skills":
                if not any(s.strip() for s in value):
                    missing.append(field)
            elif field == "graduation_year":
                if value is None:
                    missing.append(field)
            elif not str(value).strip():
                missing.append(field)
        return missing

    # ------------------------------------------------------------------
    # Submit / close
    # ------------------------------------------------------------------
    async def submit(self) -> Notice:
        missing = self.missing_fields()
        if missing:
            self.notice = Notice(kind="error", message=f"Please fill in: {', '.join(missing)}", code="invalid")
            return self.notice

        try:
            identity = await self._store.get_current_identity(self._access_token)
        except StoreError as exc:
            logger.warning(f"Identity lookup failed at submit: {exc}")
            identity = None

        if identity is None:
            self.notice = Notice(kind="error", message=SIGN_IN_NOTICE, code="sign_in_required")
            return self.notice

        try:
            if self._has_profile:
                saved = await self._store.update_participant(
                    identity.id,
                    self.draft,
                    updated_at=self._clock(),
                    access_token=self._access_token,
                )
            else:
                saved = await self._store.insert_participant(
                    self.draft,
                    identity.id,
                    access_token=self._access_token,
                )
        except StoreError as exc:
            logger.error(f"Error saving profile: {exc}")
            self.notice = Notice(kind="error", message=FAILED_NOTICE, code="store_failure")
            return self.notice

        self._has_profile = True
        if saved is not None:
            self.current_user = saved
        self.notice = Notice(kind="success", message=SAVED_NOTICE, code="saved")
        self.is_open = False
        if self._on_save is not None:
            await self._on_save()
        return self.notice

    def close(self) -> None:
        self.is_open = False
