# app/web/pages.py
from pathlib import Path

import httpx
from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from app.api.deps import get_api_client, get_settings
from app.core.config import Settings
from app.web import formatting
from app.web.view import TransactionsView

router = APIRouter(tags=["Pages"])

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent / "templates"))
templates.env.filters.update(
    money=formatting.format_money,
    signed_amount=formatting.format_amount,
    category_label=formatting.category_label,
    local_date=formatting.format_date,
    amount_class=formatting.amount_class,
)


def render(request: Request, view: TransactionsView, settings: Settings) -> HTMLResponse:
    return templates.TemplateResponse(
        request,
        "index.html",
        {"view": view, "app_name": settings.APP_NAME},
    )


@router.get("/", response_class=HTMLResponse)
async def transactions_page(
    request: Request,
    client: httpx.AsyncClient = Depends(get_api_client),
    settings: Settings = Depends(get_settings),
):
    view = TransactionsView(client)
    await view.load()
    return render(request, view, settings)


@router.post("/", response_class=HTMLResponse)
async def submit_transaction_form(
    request: Request,
    amount: str = Form(""),
    description: str = Form(""),
    category: str = Form(""),
    type: str = Form("expense"),
    date: str = Form(""),
    client: httpx.AsyncClient = Depends(get_api_client),
    settings: Settings = Depends(get_settings),
):
    """Plain HTML form post: same flow as the view's submit, rendered afterwards."""
    view = TransactionsView(client)
    await view.load()
    submitted = {
        "amount": amount,
        "description": description,
        "category": category,
        "type": type,
        "date": date,
    }
    for name, value in submitted.items():
        view.update_field(name, value)
    await view.submit()
    return render(request, view, settings)
