"""HTML pages returned to browsers posting the questionnaire form."""

from html import escape
from typing import Iterable

_STYLE = """
    body{font-family:system-ui,Segoe UI,Roboto,Inter,Arial;background:#f6fbf8;color:#0f172a;padding:24px}
    .card{max-width:640px;margin:40px auto;background:#fff;border:1px solid #e6f3ee;border-radius:16px;padding:22px;box-shadow:0 8px 24px rgba(2,32,36,0.06)}
    h1,h2{margin:0 0 8px}
    a.btn{display:inline-block;margin-top:10px;padding:10px 14px;border-radius:10px;background:#0ea5a5;color:#fff;text-decoration:none;font-weight:700}
"""

FORM_URL = "index.html"


def _page(title: str, body: str) -> str:
    return (
        "<!DOCTYPE html>\n"
        '<html lang="en">\n<head>\n  <meta charset="utf-8">\n'
        f"  <title>{escape(title)}</title>\n"
        '  <meta name="viewport" content="width=device-width,initial-scale=1">\n'
        f"  <style>{_STYLE}</style>\n</head>\n<body>\n"
        f'  <div class="card">\n{body}\n  </div>\n</body>\n</html>\n'
    )


def render_confirmation(name: str, email: str) -> str:
    """Return the success page naming the submitter."""
    body = (
        f"    <h1>Thanks, {escape(name)}!</h1>\n"
        "    <p>Your NutriPath questionnaire has been received. We'll review your answers "
        f"and follow up via email at <strong>{escape(email)}</strong>.</p>\n"
        f'    <a class="btn" href="{FORM_URL}">Back to form</a>'
    )
    return _page("Submission received", body)


def render_errors(messages: Iterable[str]) -> str:
    """Return an error page listing every message, HTML-escaped."""
    items = "".join(f"<li>{escape(m)}</li>" for m in messages)
    body = (
        "    <h2>Form errors</h2>\n"
        f"    <ul>{items}</ul>\n"
        f'    <p><a href="{FORM_URL}">Go back</a></p>'
    )
    return _page("Form errors", body)
