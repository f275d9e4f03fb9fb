"""
League email templates.

Each renderer takes the template data as keyword arguments and returns a
`RenderedEmail` with the subject plus plain-text and HTML bodies:

- gymnast_welcome: registration approved, gymnast account created
- registration_rejected: registration request declined, with reason
- roster_upload_summary: roster batch finished, sent to the uploader
- coach_registration_alert: new request waiting for a coach's review
"""

from html import escape
from typing import Any, Callable, NamedTuple, Optional

from libs.common.emails.templates.base import (
    GRADIENT_AMBER,
    GRADIENT_BLUE,
    GRADIENT_GREEN,
    GRADIENT_PURPLE,
    cta_button,
    detail_box,
    info_box,
    wrap_html,
)


class RenderedEmail(NamedTuple):
    subject: str
    body: str
    html_body: str


def render_gymnast_welcome(
    gymnast_name: str,
    gym_name: str,
    level: str,
    login_url: str,
) -> RenderedEmail:
    subject = f"Welcome to {gym_name} - Jewish Gymnastics League"

    body = (
        f"Hi {gymnast_name},\n\n"
        f"Your registration with {gym_name} has been approved and your "
        "gymnast account is ready.\n\n"
        f"Competition level: {level}\n\n"
        "Log in to track challenges, earn points and sign up for events.\n\n"
        f"Log in: {login_url}\n\n"
        "Welcome to the league!\n"
        "The JGL Team"
    )

    body_html = (
        f"<p>Hi {escape(gymnast_name)},</p>"
        f"<p>Your registration with <strong>{escape(gym_name)}</strong> has been "
        "approved and your gymnast account is ready.</p>"
        + detail_box({"Gym": escape(gym_name), "Level": escape(level)})
        + "<p>Log in to track challenges, earn points and sign up for events.</p>"
        + cta_button("Log In to JGL", login_url, color="#10b981")
    )

    html_body = wrap_html(
        title="Welcome to the League!",
        subtitle=f"You're now part of {escape(gym_name)}",
        body_html=body_html,
        header_gradient=GRADIENT_GREEN,
        preheader="Your JGL registration has been approved",
    )
    return RenderedEmail(subject, body, html_body)


def render_registration_rejected(
    applicant_name: str,
    gym_name: str,
    reason: Optional[str] = None,
) -> RenderedEmail:
    subject = f"Update on your registration with {gym_name}"
    reason_line = f"Reason: {reason}\n\n" if reason else ""

    body = (
        f"Hi {applicant_name},\n\n"
        f"Thank you for your interest in {gym_name}.\n\n"
        "After reviewing your registration, the gym is unable to approve it "
        "at this time.\n\n"
        f"{reason_line}"
        "Please contact the gym directly if you have any questions.\n\n"
        "Best regards,\n"
        "The JGL Team"
    )

    body_html = (
        f"<p>Hi {escape(applicant_name)},</p>"
        f"<p>Thank you for your interest in {escape(gym_name)}.</p>"
        "<p>After reviewing your registration, the gym is unable to approve it "
        "at this time.</p>"
        + (
            detail_box({"Reason": escape(reason)}, accent_color="#d97706")
            if reason
            else ""
        )
        + "<p>Please contact the gym directly if you have any questions.</p>"
    )

    html_body = wrap_html(
        title="Registration Update",
        subtitle=escape(gym_name),
        body_html=body_html,
        header_gradient=GRADIENT_AMBER,
        preheader=f"Update on your registration with {escape(gym_name)}",
    )
    return RenderedEmail(subject, body, html_body)


def render_roster_upload_summary(
    uploader_name: str,
    gym_name: str,
    filename: str,
    total_rows: int,
    processed_rows: int,
    error_rows: int,
    errors: Optional[list[dict[str, Any]]] = None,
) -> RenderedEmail:
    errors = errors or []
    subject = f"Roster upload complete: {filename}"

    error_lines = "\n".join(f"  Row {e['row']}: {e['error']}" for e in errors)
    body = (
        f"Hi {uploader_name},\n\n"
        f"Your roster upload for {gym_name} has finished.\n\n"
        f"File: {filename}\n"
        f"Total rows: {total_rows}\n"
        f"Imported: {processed_rows}\n"
        f"Errors: {error_rows}\n"
    )
    if errors:
        body += f"\nFirst errors:\n{error_lines}\n"
    body += "\nThe JGL Team"

    body_html = (
        f"<p>Hi {escape(uploader_name)},</p>"
        f"<p>Your roster upload for <strong>{escape(gym_name)}</strong> has finished.</p>"
        + detail_box(
            {
                "File": escape(filename),
                "Total rows": str(total_rows),
                "Imported": str(processed_rows),
                "Errors": str(error_rows),
            }
        )
    )
    if errors:
        items = "".join(
            f"<li>Row {e['row']}: {escape(str(e['error']))}</li>" for e in errors
        )
        body_html += info_box(
            f"<ul>{items}</ul>",
            bg_color="#fffbeb",
            border_color="#f59e0b",
            title="Rows that could not be imported",
        )

    html_body = wrap_html(
        title="Roster Upload Complete",
        subtitle=escape(filename),
        body_html=body_html,
        header_gradient=GRADIENT_BLUE,
    )
    return RenderedEmail(subject, body, html_body)


def render_coach_registration_alert(
    applicant_name: str,
    gym_name: str,
    level: str,
    review_url: str,
) -> RenderedEmail:
    subject = f"New registration request for {gym_name}"

    body = (
        "Hello,\n\n"
        f"{applicant_name} has requested to join {gym_name} at level {level}.\n\n"
        f"Review pending requests: {review_url}\n\n"
        "The JGL Team"
    )

    body_html = (
        "<p>Hello,</p>"
        f"<p>A new registration request is waiting for review at "
        f"<strong>{escape(gym_name)}</strong>.</p>"
        + detail_box({"Applicant": escape(applicant_name), "Level": escape(level)})
        + cta_button("Review Requests", review_url, color="#7c3aed")
    )

    html_body = wrap_html(
        title="New Registration Request",
        subtitle=escape(gym_name),
        body_html=body_html,
        header_gradient=GRADIENT_PURPLE,
        preheader=f"{escape(applicant_name)} wants to join {escape(gym_name)}",
    )
    return RenderedEmail(subject, body, html_body)


TEMPLATE_RENDERERS: dict[str, Callable[..., RenderedEmail]] = {
    "gymnast_welcome": render_gymnast_welcome,
    "registration_rejected": render_registration_rejected,
    "roster_upload_summary": render_roster_upload_summary,
    "coach_registration_alert": render_coach_registration_alert,
}
