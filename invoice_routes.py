# invoice_routes.py
from typing import Optional
from fastapi import APIRouter, Depends, Form, HTTPException, Query, Request
from fastapi.responses import JSONResponse, RedirectResponse
from sqlmodel import Session

from actions import INVOICES_PATH, MutationResult, Ok, ValidationFailed
import actions
from cache import ViewCache
from db import get_session
from errors import DatabaseError, SeedingError
from formatting import format_currency, format_date, generate_pagination, generate_y_axis
from gateway import InvoiceGateway
from seed import seed_database

router = APIRouter(tags=["invoices"])


def get_gateway(session: Session = Depends(get_session)) -> InvoiceGateway:
  return InvoiceGateway(session)

def get_view_cache(request: Request) -> ViewCache:
  return request.app.state.view_cache


def _respond(result: MutationResult):
  if isinstance(result, Ok):
    if result.redirect_to:
      return RedirectResponse(url=result.redirect_to, status_code=303)
    return {"ok": True, "message": result.message}
  if isinstance(result, ValidationFailed):
    return JSONResponse(status_code=400, content={"errors": result.errors, "message": result.message})
  return JSONResponse(status_code=500, content={"message": result.message})


def _form_fields(customerId: Optional[str], amount: Optional[str], status: Optional[str]) -> dict:
  return {"customerId": customerId, "amount": amount, "status": status}


@router.get("/seed")
def seed(session: Session = Depends(get_session), cache: ViewCache = Depends(get_view_cache)):
  try:
    seed_database(session)
  except SeedingError as exc:
    return JSONResponse(status_code=500, content={"error": str(exc)})
  cache.revalidate_path(INVOICES_PATH)
  return {"message": "Database seeded successfully"}


@router.get(INVOICES_PATH)
def list_invoices(
  query: str = "",
  page: int = Query(1, ge=1),
  gateway: InvoiceGateway = Depends(get_gateway),
  cache: ViewCache = Depends(get_view_cache),
):
  def render():
    rows = gateway.fetch_filtered_invoices(query, page)
    total_pages = gateway.fetch_invoices_pages(query)
    return {
      "invoices": [
        {
          "id": inv.id,
          "customer_id": inv.customer_id,
          "name": cust.name,
          "email": cust.email,
          "image_url": cust.image_url,
          "amount": format_currency(inv.amount),
          "date": format_date(inv.date.isoformat()),
          "status": inv.status,
        }
        for inv, cust in rows
      ],
      "total_pages": total_pages,
      "pagination": generate_pagination(page, total_pages),
    }

  try:
    return cache.get_or_render(INVOICES_PATH, (query.strip(), page), render)
  except DatabaseError as exc:
    raise HTTPException(status_code=500, detail=f"Database Error: {exc}")


@router.post(f"{INVOICES_PATH}/create")
def create_invoice(
  customerId: Optional[str] = Form(None),
  amount: Optional[str] = Form(None),
  status: Optional[str] = Form(None),
  gateway: InvoiceGateway = Depends(get_gateway),
  cache: ViewCache = Depends(get_view_cache),
):
  return _respond(actions.create_invoice(gateway, cache, _form_fields(customerId, amount, status)))


@router.get(INVOICES_PATH + "/{invoice_id}/edit")
def edit_invoice_form(invoice_id: str, gateway: InvoiceGateway = Depends(get_gateway)):
  try:
    invoice = gateway.fetch_invoice_by_id(invoice_id)
    customers = gateway.fetch_customers()
  except DatabaseError as exc:
    raise HTTPException(status_code=500, detail=f"Database Error: {exc}")
  if not invoice:
    raise HTTPException(status_code=404, detail="Could not find the requested invoice.")
  return {
    "invoice": {
      "id": invoice.id,
      "customer_id": invoice.customer_id,
      "amount": invoice.amount / 100,
      "status": invoice.status,
    },
    "customers": [{"id": c.id, "name": c.name} for c in customers],
  }


@router.post(INVOICES_PATH + "/{invoice_id}/edit")
def update_invoice(
  invoice_id: str,
  customerId: Optional[str] = Form(None),
  amount: Optional[str] = Form(None),
  status: Optional[str] = Form(None),
  gateway: InvoiceGateway = Depends(get_gateway),
  cache: ViewCache = Depends(get_view_cache),
):
  return _respond(actions.update_invoice(gateway, cache, invoice_id, _form_fields(customerId, amount, status)))


@router.post(INVOICES_PATH + "/{invoice_id}/delete")
def delete_invoice(
  invoice_id: str,
  gateway: InvoiceGateway = Depends(get_gateway),
  cache: ViewCache = Depends(get_view_cache),
):
  return _respond(actions.delete_invoice(gateway, cache, invoice_id))


@router.get("/dashboard/revenue")
def revenue_chart(gateway: InvoiceGateway = Depends(get_gateway)):
  try:
    rows = gateway.fetch_revenue()
  except DatabaseError as exc:
    raise HTTPException(status_code=500, detail=f"Database Error: {exc}")
  labels, top_label = generate_y_axis(r.revenue for r in rows)
  return {
    "revenue": [{"month": r.month, "revenue": r.revenue} for r in rows],
    "y_axis_labels": labels,
    "top_label": top_label,
  }
