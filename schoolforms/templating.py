import os

from fastapi.templating import Jinja2Templates

from .config import settings
from .utils import get_flashed_messages

TEMPLATE_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "templates")

templates = Jinja2Templates(directory=TEMPLATE_DIR)


def render_form(workflow, action: str = "") -> str:
    """Render a workflow's current form (values, inline errors, form-level error) to HTML."""
    template = templates.env.get_template("forms/form.html")
    return template.render(workflow=workflow, form=workflow.form, action=action)


def render_template(template_name: str, context: dict, status_code: int = 200):
    request = context.get("request")

    # Standard context variables
    standard_context = {
        "config": settings,
        "get_flashed_messages": lambda with_categories=True: get_flashed_messages(
            request, with_categories=with_categories
        ),
    }

    # Provided context takes precedence
    full_context = {**standard_context, **context}

    return templates.TemplateResponse(request, template_name, full_context, status_code=status_code)
