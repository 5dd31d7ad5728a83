from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from schoolforms.actions import FormBinding, FormRegistry, resolve
from schoolforms.config import settings
from schoolforms.models import FormMode
from schoolforms.templating import render_form, render_template
from schoolforms.utils import flash, safe_next
from schoolforms.workflow import FormWorkflow


router = APIRouter(prefix="/forms", tags=["forms"])


def get_registry(request: Request) -> FormRegistry:
    return request.app.state.forms


class PageHost:
    """Request-scoped collaborators: flash the notice, redirect back to the view."""

    def __init__(self, request: Request):
        self.request = request
        self.closed = False
        self.redirect_to: Optional[str] = None

    def notify(self, message: str) -> None:
        flash(self.request, message, "success")

    def close(self) -> None:
        self.closed = True

    def refresh(self) -> None:
        self.redirect_to = safe_next(self.request.query_params.get("next"), settings.DEFAULT_REDIRECT)


def _binding(registry: FormRegistry, kind: str) -> FormBinding:
    binding = registry.get(kind)
    if binding is None:
        raise HTTPException(status_code=404, detail="Form not found")
    return binding


async def _open(host: PageHost, binding: FormBinding, mode: FormMode, record_id: Optional[int] = None) -> FormWorkflow:
    references = await resolve(binding.references()) if binding.references else {}
    record = None
    if mode is FormMode.UPDATE:
        record = await resolve(binding.load(record_id)) if binding.load else None
        if record is None:
            raise HTTPException(status_code=404, detail="Record not found")
    return FormWorkflow(
        binding.form_class,
        mode,
        record,
        references,
        on_create=binding.on_create,
        on_update=binding.on_update,
        notify=host.notify,
        refresh=host.refresh,
        close=host.close,
    )


def _page(request: Request, workflow: FormWorkflow, status_code: int = 200):
    return render_template(
        "forms/page.html",
        {
            "request": request,
            "form": workflow.form,
            "form_html": render_form(workflow, action=str(request.url)),
        },
        status_code=status_code,
    )


async def _submit(host: PageHost, workflow: FormWorkflow):
    request = host.request
    formdata = await request.form()
    for name in workflow.form_class.attachments:
        value = formdata.get(name)
        if isinstance(value, str):
            workflow.use_upload(name, value)

    result = await workflow.submit(formdata)
    if result.success:
        return RedirectResponse(host.redirect_to or settings.DEFAULT_REDIRECT, status_code=303)

    # workflow.error is rendered inside the form
    return _page(request, workflow, status_code=400)


@router.get("/{kind}/create", response_class=HTMLResponse, name="forms.create")
async def create_form(kind: str, request: Request, registry: FormRegistry = Depends(get_registry)):
    workflow = await _open(PageHost(request), _binding(registry, kind), FormMode.CREATE)
    return _page(request, workflow)


@router.post("/{kind}/create", name="forms.create_post")
async def create_action(kind: str, request: Request, registry: FormRegistry = Depends(get_registry)):
    host = PageHost(request)
    workflow = await _open(host, _binding(registry, kind), FormMode.CREATE)
    return await _submit(host, workflow)


@router.get("/{kind}/{record_id}/edit", response_class=HTMLResponse, name="forms.edit")
async def edit_form(kind: str, record_id: int, request: Request, registry: FormRegistry = Depends(get_registry)):
    workflow = await _open(PageHost(request), _binding(registry, kind), FormMode.UPDATE, record_id)
    return _page(request, workflow)


@router.post("/{kind}/{record_id}/edit", name="forms.edit_post")
async def edit_action(kind: str, record_id: int, request: Request, registry: FormRegistry = Depends(get_registry)):
    host = PageHost(request)
    workflow = await _open(host, _binding(registry, kind), FormMode.UPDATE, record_id)
    return await _submit(host, workflow)
