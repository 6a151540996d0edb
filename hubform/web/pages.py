"""Server-rendered contact form pages."""

from pathlib import Path

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from hubform.fields.collect import collect_values
from hubform.shell.orchestrator import ContactFormShell

router = APIRouter(tags=["pages"])
templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))

TEMPLATE_NAME = "contact_form.html"


def new_shell(request: Request) -> ContactFormShell:
    """Create a shell for one request from the app's shared components."""
    state = request.app.state
    return ContactFormShell(
        settings=state.settings,
        fetcher=state.fetcher,
        submitter=state.submitter,
    )


@router.get("/", response_class=HTMLResponse)
async def contact_page(request: Request) -> HTMLResponse:
    """Render the configured form."""
    shell = new_shell(request)
    await shell.load()
    return templates.TemplateResponse(request, TEMPLATE_NAME, shell.view())


@router.post("/", response_class=HTMLResponse)
async def contact_submit(request: Request) -> HTMLResponse:
    """Accept the rendered form's POST, submit it and re-render."""
    form = await request.form()
    shell = new_shell(request)
    await shell.load()

    # File inputs are not relayed
    items = [(name, value) for name, value in form.multi_items() if isinstance(value, str)]
    await shell.submit(collect_values(items, shell.definition))

    return templates.TemplateResponse(request, TEMPLATE_NAME, shell.view())
