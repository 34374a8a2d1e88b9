# directory_app/rendering.py
"""Server-side HTML for the single page.

Everything interpolated into markup goes through `html.escape`.
"""

from __future__ import annotations

from html import escape
from typing import List, Optional

from directory_app.components.page import DirectoryPage
from directory_app.components.profile_editor import ProfileEditor
from directory_app.store_client.models import DirectoryStats, Notice, ParticipantCard

PAGE_TITLE = "AI ENGINE: UK UNIVERSITY HACKATHON"
PAGE_TAGLINE = "Find your perfect hackathon teammate"

_STYLE = """
body { margin: 0; background: #1a0b2e; color: #b4ff39; font-family: system-ui, sans-serif; }
header, main { max-width: 72rem; margin: 0 auto; padding: 1.5rem; }
.stats, .grid { display: grid; grid-template-columns: repeat(auto-fill, minmax(16rem, 1fr)); gap: 1.5rem; }
.panel { background: #2d1b4e; border: 1px solid rgba(180, 255, 57, .2); border-radius: .5rem; padding: 1.5rem; }
.tag { display: inline-block; background: rgba(180, 255, 57, .1); border-radius: .375rem; padding: .25rem .5rem; margin: 0 .25rem .25rem 0; }
.button { display: inline-block; background: #b4ff39; color: #1a0b2e; border-radius: .5rem; padding: .75rem 1.5rem; font-weight: 600; text-decoration: none; margin: 2rem 0; }
.modal { position: fixed; inset: 0; background: rgba(0, 0, 0, .5); display: flex; align-items: center; justify-content: center; }
.notice-success { color: #b4ff39; } .notice-error { color: #ff6b6b; }
label { display: block; margin-top: 1rem; }
input { width: 100%; box-sizing: border-box; padding: .5rem 1rem; background: #1a0b2e; color: inherit; border: 1px solid rgba(180, 255, 57, .2); border-radius: .5rem; }
"""


def _tags(items: List[str]) -> str:
    return "".join(f'<span class="tag">{escape(i)}</span>' for i in items)


def render_notice(notice: Optional[Notice]) -> str:
    if notice is None:
        return ""
    return f'<p class="notice notice-{notice.kind}" role="status">{escape(notice.message)}</p>'


def render_stats(stats: DirectoryStats) -> str:
    tiles = [
        ("Participants", stats.participants),
        ("Universities", stats.universities),
        ("Skills", stats.skills),
        ("Project Ideas", stats.project_ideas),
    ]
    body = "".join(
        f'<div class="panel stat"><p>{label}</p><p class="stat-value">{value}</p></div>'
        for label, value in tiles
    )
    return f'<section class="stats">{body}</section>'


def render_card(card: ParticipantCard) -> str:
    parts = [
        f'<article class="panel card" id="participant-{escape(card.id)}">',
        f"<h3>{escape(card.name)}</h3>",
        f"<p>{escape(card.university)}</p>",
        f'<a class="contact" href="{escape(card.contact_href)}" title="Contact">Contact</a>',
        f'<div class="skills"><p>Skills</p>{_tags(card.skills)}</div>',
    ]
    if card.project_idea:
        parts.append(f'<div class="project-idea"><p>Project Idea</p><p>{escape(card.project_idea)}</p></div>')
    if card.ai_interests:
        parts.append(f'<div class="ai-interests"><p>AI Interests</p>{_tags(card.ai_interests)}</div>')
    parts.append("</article>")
    return "".join(parts)


def _input(label: str, name: str, value: str, input_type: str = "text", required: bool = True, placeholder: str = "") -> str:
    attrs = f' placeholder="{escape(placeholder)}"' if placeholder else ""
    if required:
        attrs += " required"
    return (
        f'<label>{escape(label)}'
        f'<input type="{input_type}" name="{name}" value="{escape(value)}"{attrs}></label>'
    )


def render_editor(editor: ProfileEditor) -> str:
    d = editor.draft
    fields = [
        _input("Name", "name", d.name),
        _input("University", "university", d.university),
        _input("Email", "email", d.email, input_type="email"),
        _input("Graduation Year", "graduation_year", str(d.graduation_year), input_type="number"),
        _input(
            "Skills (comma-separated)",
            "skills",
            editor.list_input_value("skills"),
            placeholder="Python, React, Machine Learning",
        ),
        _input(
            "Project Idea (optional)",
            "project_idea",
            d.project_idea,
            required=False,
            placeholder="Describe your project idea",
        ),
        _input(
            "AI Interests (comma-separated, optional)",
            "ai_interests",
            editor.list_input_value("ai_interests"),
            required=False,
            placeholder="LLMs, Computer Vision, NLP",
        ),
    ]
    return (
        '<div class="modal"><div class="panel editor">'
        f'<h2>{escape(editor.title)}</h2><a class="close" href="/" title="Close">&times;</a>'
        f"{render_notice(editor.notice)}"
        f'<form method="post" action="/profile">{"".join(fields)}'
        '<button class="button" type="submit">Save Profile</button></form>'
        "</div></div>"
    )


def render_page(page: DirectoryPage) -> str:
    cards = "".join(render_card(c) for c in page.directory.cards())
    editor = render_editor(page.editor) if page.is_editing and page.editor is not None else ""
    return (
        "<!doctype html><html><head><meta charset=\"utf-8\">"
        f"<title>{escape(PAGE_TITLE)}</title><style>{_STYLE}</style></head><body>"
        f"<header><h1>{escape(PAGE_TITLE)}</h1><p>{escape(PAGE_TAGLINE)}</p></header>"
        "<main>"
        f"{render_notice(page.flash)}"
        f"{render_stats(page.directory.stats())}"
        f'<a class="button" href="/?edit=1">{escape(page.profile_button_label)}</a>'
        f"{editor}"
        f'<section class="grid">{cards}</section>'
        "</main></body></html>"
    )
