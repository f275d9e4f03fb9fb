"""
Shared branded email layout for the Jewish Gymnastics League.

Every outgoing email goes through `wrap_html()` so headers, typography and
footer stay consistent. Helper functions cover the common content blocks.

Color palette by email category:
- General / Welcome:   blue    #2563eb -> #1d4ed8
- Success / Approval:  green   #10b981 -> #059669
- Alerts / Rejection:  amber   #f59e0b -> #d97706
- Staff / Coaches:     purple  #8b5cf6 -> #7c3aed
"""

GRADIENT_BLUE = "linear-gradient(135deg, #2563eb 0%, #1d4ed8 100%)"
GRADIENT_GREEN = "linear-gradient(135deg, #10b981 0%, #059669 100%)"
GRADIENT_AMBER = "linear-gradient(135deg, #f59e0b 0%, #d97706 100%)"
GRADIENT_PURPLE = "linear-gradient(135deg, #8b5cf6 0%, #7c3aed 100%)"


def wrap_html(
    title: str,
    body_html: str,
    subtitle: str = "",
    header_gradient: str = GRADIENT_BLUE,
    preheader: str = "",
) -> str:
    """Wrap inner content in the branded league email layout.

    Args:
        title: Bold heading shown in the coloured header banner.
        body_html: The main email content (already-formatted HTML).
        subtitle: Smaller text below the title in the header.
        header_gradient: CSS gradient for the header background.
        preheader: Hidden preview text shown in inbox list view.
    """
    subtitle_html = (
        f'<p style="margin: 8px 0 0 0; opacity: 0.9; font-size: 15px;">{subtitle}</p>'
        if subtitle
        else ""
    )
    preheader_html = (
        f'<span style="display:none;max-height:0;overflow:hidden;">{preheader}</span>'
        if preheader
        else ""
    )

    return f"""\
<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1.0" />
    <title>{title}</title>
    <style>
        body {{
            margin: 0;
            padding: 0;
            font-family: -apple-system, 'Segoe UI', Roboto, Arial, sans-serif;
            line-height: 1.6;
            color: #334155;
            background-color: #f1f5f9;
        }}
        .email-container {{
            max-width: 600px;
            margin: 32px auto;
            background-color: #ffffff;
            border-radius: 12px;
            overflow: hidden;
        }}
        .email-header {{
            background: {header_gradient};
            padding: 32px;
            color: #ffffff;
        }}
        .email-header h1 {{
            margin: 0;
            font-size: 24px;
        }}
        .email-body {{
            padding: 32px;
            font-size: 15px;
        }}
        .detail-box {{
            background: #f8fafc;
            border-left: 4px solid #2563eb;
            padding: 16px 20px;
            margin: 20px 0;
        }}
        .detail-row {{
            margin: 8px 0;
            font-size: 14px;
        }}
        .detail-label {{
            color: #64748b;
        }}
        .detail-value {{
            font-weight: 600;
            color: #1e293b;
        }}
        .cta-wrapper {{
            text-align: center;
            margin: 28px 0;
        }}
        .cta-button {{
            display: inline-block;
            padding: 12px 28px;
            border-radius: 8px;
            font-weight: 600;
            color: #ffffff !important;
            text-decoration: none;
        }}
        .email-footer {{
            background: #f8fafc;
            padding: 20px 32px;
            text-align: center;
            font-size: 13px;
            color: #94a3b8;
        }}
    </style>
</head>
<body>
    {preheader_html}
    <div class="email-container">
        <div class="email-header">
            <h1>{title}</h1>
            {subtitle_html}
        </div>
        <div class="email-body">
            {body_html}
        </div>
        <div class="email-footer">
            <p><strong>Jewish Gymnastics League</strong></p>
            <p><a href="https://jglgymnastics.org">jglgymnastics.org</a></p>
        </div>
    </div>
</body>
</html>"""


def detail_box(
    items: dict[str, str],
    accent_color: str = "#2563eb",
) -> str:
    """Render a key-value detail box. Empty values are skipped."""
    rows = "\n".join(
        f'<div class="detail-row"><span class="detail-label">{label}:</span> '
        f'<span class="detail-value">{value}</span></div>'
        for label, value in items.items()
        if value
    )
    return (
        f'<div class="detail-box" style="border-left-color: {accent_color};">'
        f"{rows}</div>"
    )


def cta_button(label: str, url: str, color: str = "#2563eb") -> str:
    return (
        f'<div class="cta-wrapper">'
        f'<a href="{url}" class="cta-button" style="background-color: {color};">'
        f"{label}</a></div>"
    )


def info_box(
    content: str,
    bg_color: str = "#f0fdf4",
    border_color: str = "#22c55e",
    title: str = "",
) -> str:
    """Render a coloured info box with an optional bold title line."""
    title_html = f"<strong>{title}</strong><br/>" if title else ""
    return (
        f'<div style="background: {bg_color}; border-left: 4px solid {border_color}; '
        f'padding: 16px 20px; margin: 20px 0;">'
        f"{title_html}{content}</div>"
    )
