"""
Command Options

One pydantic model per command. Each model is built from ParsedArgs with
from_args() and converts every raw string into its typed value up front,
so a command either gets fully valid options or never runs at all.

DESIGN DECISION: Value-taking options given as bare flags ("--category"
with nothing after it) are rejected instead of being stored as True.
Unknown options are ignored, as they always have been.
"""

from datetime import date
from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from expense_tracker.cli.parser import OptionValue, ParsedArgs
from expense_tracker.models.expense import ExpenseUpdate
from expense_tracker.validation import (
    ExpenseValidationError,
    parse_amount,
    parse_category,
    parse_date,
    parse_expense_id,
    parse_month,
    parse_year,
)


def _option_text(value: OptionValue, name: str) -> str:
    if not isinstance(value, str):
        raise ExpenseValidationError(name, f"--{name} requires a value")
    return value


def _collect(args: ParsedArgs, names: dict[str, str]) -> dict[str, Any]:
    """Copy the options present on the command line to model field names."""
    return {
        field: args.options[option]
        for option, field in names.items()
        if option in args.options
    }


class CommandOptions(BaseModel):
    """Base for all per-command option models."""
    model_config = ConfigDict(frozen=True)

    @field_validator('year', mode='before', check_fields=False)
    @classmethod
    def validate_year(cls, v: OptionValue) -> int:
        return parse_year(_option_text(v, "year"), "--year")


class AddOptions(CommandOptions):
    """add <description> <amount> [--category <cat>] [--date YYYY-MM-DD]"""

    description: str
    amount: Decimal
    category: Optional[str] = None
    expense_date: Optional[date] = None

    @classmethod
    def from_args(cls, args: ParsedArgs) -> "AddOptions":
        data = {
            "description": args.positional(0),
            "amount": args.positional(1),
        }
        data.update(_collect(args, {"category": "category", "date": "expense_date"}))
        return cls.model_validate(data)

    @field_validator('description', mode='before')
    @classmethod
    def validate_description(cls, v: str) -> str:
        if not v.strip():
            raise ExpenseValidationError("description", "add requires description and amount")
        return v.strip()

    @field_validator('amount', mode='before')
    @classmethod
    def validate_amount(cls, v: str) -> Decimal:
        if not v:
            raise ExpenseValidationError("amount", "add requires description and amount")
        return parse_amount(v)

    @field_validator('category', mode='before')
    @classmethod
    def validate_category(cls, v: OptionValue) -> Optional[str]:
        return parse_category(_option_text(v, "category"))

    @field_validator('expense_date', mode='before')
    @classmethod
    def validate_date(cls, v: OptionValue) -> date:
        return parse_date(_option_text(v, "date"))


class UpdateOptions(CommandOptions):
    """update <id> [--description <desc>] [--amount <amt>] [--category <cat>] [--date YYYY-MM-DD]"""

    expense_id: int
    description: Optional[str] = None
    amount: Optional[Decimal] = None
    category: Optional[str] = None
    expense_date: Optional[date] = None

    @classmethod
    def from_args(cls, args: ParsedArgs) -> "UpdateOptions":
        data: dict[str, Any] = {"expense_id": args.positional(0)}
        data.update(_collect(args, {
            "description": "description",
            "amount": "amount",
            "category": "category",
            "date": "expense_date",
        }))
        return cls.model_validate(data)

    @field_validator('expense_id', mode='before')
    @classmethod
    def validate_id(cls, v: str) -> int:
        try:
            return parse_expense_id(v)
        except ExpenseValidationError:
            raise ExpenseValidationError("id", "update requires numeric id")

    @field_validator('description', mode='before')
    @classmethod
    def validate_description(cls, v: OptionValue) -> str:
        text = _option_text(v, "description").strip()
        if not text:
            raise ExpenseValidationError("description", "--description cannot be empty")
        return text

    @field_validator('amount', mode='before')
    @classmethod
    def validate_amount(cls, v: OptionValue) -> Decimal:
        return parse_amount(_option_text(v, "amount"))

    @field_validator('category', mode='before')
    @classmethod
    def validate_category(cls, v: OptionValue) -> Optional[str]:
        return parse_category(_option_text(v, "category"))

    @field_validator('expense_date', mode='before')
    @classmethod
    def validate_date(cls, v: OptionValue) -> date:
        return parse_date(_option_text(v, "date"))

    def to_update(self) -> ExpenseUpdate:
        """Only the options given on the command line become changes."""
        fields = {
            "description": "description",
            "amount": "amount",
            "category": "category",
            "expense_date": "date",
        }
        return ExpenseUpdate(**{
            target: getattr(self, source)
            for source, target in fields.items()
            if source in self.model_fields_set
        })


class DeleteOptions(CommandOptions):
    """delete <id>"""

    expense_id: int

    @classmethod
    def from_args(cls, args: ParsedArgs) -> "DeleteOptions":
        return cls.model_validate({"expense_id": args.positional(0)})

    @field_validator('expense_id', mode='before')
    @classmethod
    def validate_id(cls, v: str) -> int:
        try:
            return parse_expense_id(v)
        except ExpenseValidationError:
            raise ExpenseValidationError("id", "delete requires numeric id")


class ListOptions(CommandOptions):
    """list [--category <cat>] [--month <1-12>] [--year YYYY]"""

    category: Optional[str] = None
    month: Optional[int] = None
    year: Optional[int] = None

    @classmethod
    def from_args(cls, args: ParsedArgs) -> "ListOptions":
        return cls.model_validate(
            _collect(args, {"category": "category", "month": "month", "year": "year"})
        )

    @field_validator('category', mode='before')
    @classmethod
    def validate_category(cls, v: OptionValue) -> str:
        text = _option_text(v, "category").strip()
        if not text:
            raise ExpenseValidationError("category", "--category cannot be empty")
        return text

    @field_validator('month', mode='before')
    @classmethod
    def validate_month(cls, v: OptionValue) -> int:
        return parse_month(_option_text(v, "month"), "--month")


class ExportOptions(ListOptions):
    """export <filename> [--month <1-12>] [--category <cat>] [--year YYYY]"""

    filename: str = Field(..., min_length=1)

    @classmethod
    def from_args(cls, args: ParsedArgs) -> "ExportOptions":
        data = {"filename": args.positional(0)}
        data.update(
            _collect(args, {"category": "category", "month": "month", "year": "year"})
        )
        return cls.model_validate(data)

    @field_validator('filename', mode='before')
    @classmethod
    def validate_filename(cls, v: str) -> str:
        if not v:
            raise ExpenseValidationError("filename", "export requires filename")
        return v


class MonthOptions(CommandOptions):
    """<command> <month> [--year YYYY], for monthly-summary and show-budget"""

    command: str
    month: int
    year: Optional[int] = None

    @classmethod
    def from_args(cls, args: ParsedArgs) -> "MonthOptions":
        data = {"command": args.command, "month": args.positional(0)}
        data.update(_collect(args, {"year": "year"}))
        return cls.model_validate(data)

    @field_validator('month', mode='before')
    @classmethod
    def validate_month(cls, v: str, info: ValidationInfo) -> int:
        try:
            return parse_month(v)
        except ExpenseValidationError:
            command = info.data.get("command", "command")
            raise ExpenseValidationError("month", f"{command} requires month 1-12")


class SetBudgetOptions(CommandOptions):
    """set-budget <month> <amount> [--year YYYY]"""

    month: int
    amount: Decimal
    year: Optional[int] = None

    @classmethod
    def from_args(cls, args: ParsedArgs) -> "SetBudgetOptions":
        data = {"month": args.positional(0), "amount": args.positional(1)}
        data.update(_collect(args, {"year": "year"}))
        return cls.model_validate(data)

    @field_validator('month', 'amount', mode='before')
    @classmethod
    def validate_month_and_amount(cls, v: str, info: ValidationInfo) -> Any:
        try:
            if info.field_name == "month":
                return parse_month(v)
            return parse_amount(v)
        except ExpenseValidationError:
            raise ExpenseValidationError(
                info.field_name, "set-budget requires month(1-12) and amount"
            )
