from libs.common.emails.templates.league import (
    TEMPLATE_RENDERERS,
    RenderedEmail,
)

__all__ = ["TEMPLATE_RENDERERS", "RenderedEmail"]
