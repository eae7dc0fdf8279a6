"""Reminder message rendering per urgency tier."""

import html
from dataclasses import dataclass

from ...domain.entities import ReminderPayload
from ...domain.value_objects import UrgencyTier


@dataclass(frozen=True)
class TierStyle:
    emoji: str
    prefix: str
    color: str
    headline: str
    guidance: tuple[str, ...]


TIER_STYLES: dict[UrgencyTier, TierStyle] = {
    UrgencyTier.PLANNING: TierStyle(
        "📅", "Planning Reminder", "#17a2b8",
        "Start planning for your certification renewal",
        (
            "Review current certification requirements",
            "Check for any updates to the exam format",
            "Begin collecting continuing education credits if required",
            "Set aside budget for renewal fees",
        ),
    ),
    UrgencyTier.PREPARATION: TierStyle(
        "📚", "Preparation Phase", "#007bff",
        "Time to begin your renewal preparation",
        (
            "Schedule your renewal exam or complete required training",
            "Gather necessary documentation",
            "Review study materials and practice tests",
            "Plan your study schedule",
        ),
    ),
    UrgencyTier.ACTION: TierStyle(
        "⚡", "Action Required", "#ffc107",
        "Immediate action needed for renewal",
        (
            "Register for your renewal exam now",
            "Complete any outstanding requirements",
            "Submit renewal application",
            "Pay renewal fees",
        ),
    ),
    UrgencyTier.URGENT: TierStyle(
        "🚨", "URGENT", "#fd7e14",
        "Urgent: Certification expires soon!",
        (
            "Complete renewal process immediately",
            "Contact vendor support if needed",
            "Ensure all documentation is submitted",
        ),
    ),
    UrgencyTier.CRITICAL: TierStyle(
        "🔥", "CRITICAL", "#dc3545",
        "Critical: Certification expires very soon!",
        (
            "This is your final reminder",
            "Complete renewal today",
            "Contact your manager if assistance is needed",
        ),
    ),
    UrgencyTier.EXPIRED: TierStyle(
        "❌", "EXPIRED", "#6c757d",
        "Your certification has expired",
        (
            "Check recertification requirements",
            "Schedule recertification exam",
            "Update your status in CertTracker",
        ),
    ),
}


@dataclass(frozen=True)
class RenderedReminder:
    subject: str
    html: str
    text: str


def _suffix(payload: ReminderPayload) -> str:
    if payload.urgency_tier == UrgencyTier.EXPIRED or payload.days_until_expiration <= 0:
        return "has expired"
    if payload.urgency_tier == UrgencyTier.PLANNING:
        return "expires in 1 year"
    return f"expires in {payload.days_until_expiration} days"


def remaining_label(days_until_expiration: int) -> str:
    if days_until_expiration > 0:
        return f"{days_until_expiration} days remaining"
    return "EXPIRED"


def render_subject(payload: ReminderPayload) -> str:
    style = TIER_STYLES[payload.urgency_tier]
    return f"{style.emoji} {style.prefix}: {payload.certification_name} {_suffix(payload)}"


def render_reminder(payload: ReminderPayload, frontend_url: str) -> RenderedReminder:
    style = TIER_STYLES[payload.urgency_tier]
    expiration = payload.expiration_date.strftime("%B %d, %Y").replace(" 0", " ")
    certifications_url = f"{frontend_url.rstrip('/')}/certifications"
    settings_url = f"{frontend_url.rstrip('/')}/settings"
    name = html.escape(payload.recipient_name)
    cert_name = html.escape(payload.certification_name)
    vendor = html.escape(payload.vendor)

    guidance_html = "".join(f"<li>{html.escape(item)}</li>" for item in style.guidance)
    certificate_html = (
        f"<p><strong>Certificate Number:</strong> {html.escape(payload.certificate_number)}</p>"
        if payload.certificate_number
        else ""
    )
    renewal_html = (
        f'<a href="{html.escape(payload.renewal_url)}" '
        'style="background:#6c757d;color:white;padding:12px 24px;border-radius:6px;'
        'text-decoration:none;">Renewal Information</a>'
        if payload.renewal_url
        else ""
    )

    body_html = f"""<!DOCTYPE html>
<html>
<body style="font-family: Arial, sans-serif; color: #333;">
  <div style="max-width: 600px; margin: 0 auto; padding: 20px;">
    <div style="background: {style.color}; color: white; padding: 20px; text-align: center;">
      <h1>{style.emoji} Certification Reminder</h1>
      <p>{html.escape(style.headline)}</p>
    </div>
    <p>Hello {name},</p>
    <div style="border-left: 4px solid {style.color}; padding: 20px;">
      <h3>{cert_name}</h3>
      <p><strong>Vendor:</strong> {vendor}</p>
      <p><strong>Expiration Date:</strong> {expiration}</p>
      {certificate_html}
      <p style="font-size: 24px; font-weight: bold; color: {style.color};">
        {remaining_label(payload.days_until_expiration)}
      </p>
    </div>
    <ul>{guidance_html}</ul>
    <p>
      <a href="{certifications_url}" style="background:#007bff;color:white;padding:12px 24px;border-radius:6px;text-decoration:none;">View My Certifications</a>
      {renewal_html}
    </p>
    <p>Best regards,<br>The CertTracker Team</p>
    <p style="font-size: 12px; color: #666;">This is an automated reminder from CertTracker.
      To update your notification preferences, <a href="{settings_url}">click here</a>.</p>
  </div>
</body>
</html>"""

    status_line = (
        f"expires in {payload.days_until_expiration} days"
        if payload.days_until_expiration > 0
        else "has expired"
    )
    text_lines = [
        f"{style.emoji} Certification Reminder: {payload.certification_name}",
        "",
        f"Hello {payload.recipient_name},",
        "",
        f"Your {payload.vendor} {payload.certification_name} certification "
        f"{status_line} on {expiration}.",
        "",
        *(f"- {item}" for item in style.guidance),
        "",
        f"View your certifications: {certifications_url}",
    ]
    if payload.renewal_url:
        text_lines.append(f"Renewal information: {payload.renewal_url}")
    text_lines += ["", "Best regards,", "The CertTracker Team"]

    return RenderedReminder(
        subject=render_subject(payload),
        html=body_html,
        text="\n".join(text_lines),
    )
