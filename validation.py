# validation.py
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Annotated, Any, Dict, List, Literal, Mapping, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

from errors import ValidationError


class RequiredString(BaseModel):
  model_config = ConfigDict(frozen=True)

  kind: Literal["required_string"] = "required_string"
  message: str

  def check(self, raw: Optional[str]) -> str:
    if not isinstance(raw, str) or not raw.strip():
      raise ValueError(self.message)
    return raw.strip()


class PositiveNumber(BaseModel):
  """Coerces like a form number input: absent or blank reads as 0."""

  model_config = ConfigDict(frozen=True)

  kind: Literal["positive_number"] = "positive_number"
  message: str
  precision: Optional[int] = None
  maximum: Optional[Decimal] = None

  def check(self, raw: Optional[str]) -> float:
    text = str(raw).strip() if raw is not None else ""
    try:
      value = Decimal(text) if text else Decimal(0)
      if not value.is_finite():
        raise ValueError(self.message)
      if self.precision is not None:
        value = value.quantize(Decimal(1).scaleb(-self.precision), rounding=ROUND_HALF_UP)
    except InvalidOperation:
      raise ValueError(self.message)
    if value <= 0 or (self.maximum is not None and value > self.maximum):
      raise ValueError(self.message)
    return float(value)


class OneOf(BaseModel):
  model_config = ConfigDict(frozen=True)

  kind: Literal["one_of"] = "one_of"
  message: str
  choices: Tuple[str, ...]

  def check(self, raw: Optional[str]) -> str:
    if raw not in self.choices:
      raise ValueError(self.message)
    return raw


Rule = Annotated[Union[RequiredString, PositiveNumber, OneOf], Field(discriminator="kind")]


def validate(schema: Mapping[str, Rule], raw: Mapping[str, Any]) -> Dict[str, Any]:
  """Run every rule and collect all field errors before raising."""
  values: Dict[str, Any] = {}
  errors: Dict[str, List[str]] = {}
  for field, rule in schema.items():
    try:
      values[field] = rule.check(raw.get(field))
    except ValueError as exc:
      errors.setdefault(field, []).append(str(exc))
  if errors:
    raise ValidationError(errors)
  return values


INVOICE_STATUSES = ("pending", "paid")

# amounts are stored as cents in a 32-bit INT column
MAX_AMOUNT = Decimal(2**31 - 1) / 100

INVOICE_FORM_SCHEMA: Dict[str, Rule] = {
  "customerId": RequiredString(message="Please select a customer."),
  "amount": PositiveNumber(message="Please enter an amount greater than $0.", precision=2, maximum=MAX_AMOUNT),
  "status": OneOf(message="Please select an invoice status.", choices=INVOICE_STATUSES),
}


class InvoiceForm(BaseModel):
  customer_id: str
  amount: float
  status: Literal["pending", "paid"]


def validate_invoice_form(raw: Mapping[str, Any]) -> InvoiceForm:
  values = validate(INVOICE_FORM_SCHEMA, raw)
  return InvoiceForm(customer_id=values["customerId"], amount=values["amount"], status=values["status"])
