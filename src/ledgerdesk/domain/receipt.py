"""Receipt data builder.

Turns a freshly recorded payment or a reconciled historical payment into the
same immutable ``Receipt`` snapshot for printing or preview.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Union

from ledgerdesk.domain.entities import (
    Account,
    BalanceSign,
    HistoricalPayment,
    PaymentResult,
    Receipt,
)

DEFAULT_LANGUAGE = "fr"

WEEKDAY_NAMES = {
    "fr": ("lundi", "mardi", "mercredi", "jeudi", "vendredi", "samedi", "dimanche"),
    "en": ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"),
    "ar": ("الاثنين", "الثلاثاء", "الأربعاء", "الخميس", "الجمعة", "السبت", "الأحد"),
}

RECEIPT_LABELS = {
    "fr": {
        "title": "***  REÇU  ***",
        "client_payment": "PAIEMENT CLIENT",
        "supplier_payment": "PAIEMENT FOURNISSEUR",
        "client": "CLIENT",
        "supplier": "FOURNISSEUR",
        "reference": "RÉF",
        "number": "N°",
        "method": "MODE",
        "previous_balance": "ANCIEN SOLDE",
        "paid": "MONTANT PAYÉ",
        "new_balance": "NOUVEAU SOLDE",
        "credit": "créditeur",
        "debit": "débiteur",
        "printed": "Imprimé le",
    },
    "en": {
        "title": "***  RECEIPT  ***",
        "client_payment": "CLIENT PAYMENT",
        "supplier_payment": "SUPPLIER PAYMENT",
        "client": "CLIENT",
        "supplier": "SUPPLIER",
        "reference": "REF",
        "number": "NO",
        "method": "METHOD",
        "previous_balance": "PREVIOUS BALANCE",
        "paid": "AMOUNT PAID",
        "new_balance": "NEW BALANCE",
        "credit": "credit",
        "debit": "debit",
        "printed": "Printed",
    },
    "ar": {
        "title": "*** وصل دفع ***",
        "client_payment": "دفعة عميل",
        "supplier_payment": "دفعة مورد",
        "client": "العميل",
        "supplier": "المورد",
        "reference": "المرجع",
        "number": "رقم",
        "method": "طريقة الدفع",
        "previous_balance": "الرصيد السابق",
        "paid": "المبلغ المدفوع",
        "new_balance": "الرصيد الجديد",
        "credit": "دائن",
        "debit": "مدين",
        "printed": "التوقيت",
    },
}

METHOD_LABELS = {
    "fr": {"cash": "ESPÈCES", "cheque": "CHÈQUE", "transfer": "VIREMENT"},
    "en": {"cash": "CASH", "cheque": "CHECK", "transfer": "TRANSFER"},
    "ar": {"cash": "نقدا", "cheque": "شيك", "transfer": "تحويل"},
}


def resolve_language(language: Optional[str]) -> str:
    """Return a supported language code, defaulting to French."""
    if language:
        code = language.strip().lower()[:2]
        if code in WEEKDAY_NAMES:
            return code
    return DEFAULT_LANGUAGE


def format_receipt_date(value: date, language: Optional[str] = None) -> str:
    """Format a date as "weekday, dd/mm/yyyy" in the given language."""
    weekday = WEEKDAY_NAMES[resolve_language(language)][value.weekday()]
    return f"{weekday}, {value.day:02d}/{value.month:02d}/{value.year}"


def format_sequence_number(transaction_id: Optional[int]) -> str:
    if transaction_id is None:
        return ""
    return f"{transaction_id:06d}"


def build_receipt(
    account: Account,
    source: Union[PaymentResult, HistoricalPayment],
    language: Optional[str] = None,
    printed_at: Optional[datetime] = None,
) -> Receipt:
    """Assemble the receipt snapshot for a payment.

    Args:
        account: Account the payment was made on
        source: A just-recorded PaymentResult or a reconciled HistoricalPayment
        language: Receipt language (fr, en, ar); unknown values fall back to fr
        printed_at: Print timestamp, defaults to now

    Returns:
        Receipt value object
    """
    language = resolve_language(language)
    if isinstance(source, HistoricalPayment):
        txn = source.transaction
        snapshot = source.snapshot
        paid_amount = txn.amount
        method = txn.method
        payment_date = txn.date
        previous_balance = snapshot.previous_balance
        new_balance = snapshot.new_balance
        new_balance_sign = snapshot.new_balance_sign
        transaction_id = txn.id
    else:
        paid_amount = source.amount
        method = source.method
        payment_date = source.date
        previous_balance = source.previous_balance
        new_balance = source.new_balance
        new_balance_sign = source.new_balance_sign
        transaction_id = source.transaction_id

    return Receipt(
        account_code=account.code,
        account_name=account.display_name.upper(),
        account_kind=account.kind,
        paid_amount=Decimal(paid_amount),
        method=method,
        previous_balance=Decimal(previous_balance),
        new_balance=Decimal(new_balance),
        new_balance_sign=new_balance_sign,
        sequence_number=format_sequence_number(transaction_id),
        formatted_date=format_receipt_date(payment_date, language),
        print_timestamp=printed_at or datetime.now(),
        language=language,
    )


def render_receipt_lines(receipt: Receipt, width: int = 40) -> list[str]:
    """Lay out a receipt as plain text lines for a thermal-style preview."""
    labels = RECEIPT_LABELS[receipt.language]
    separator = "- " * (width // 2)

    def row(label: str, value: str) -> str:
        gap = max(1, width - len(label) - len(value))
        return f"{label}{' ' * gap}{value}"

    is_supplier = receipt.account_kind.value == "supplier"
    item_label = labels["supplier_payment"] if is_supplier else labels["client_payment"]
    party_label = labels["supplier"] if is_supplier else labels["client"]
    method = (
        METHOD_LABELS[receipt.language][receipt.method.value] if receipt.method else "-"
    )
    sign_label = labels["credit"] if receipt.new_balance_sign == BalanceSign.CREDIT else labels["debit"]

    lines = [
        labels["title"].center(width).rstrip(),
        separator.rstrip(),
        receipt.formatted_date,
        row(labels["number"], receipt.sequence_number or "-"),
        separator.rstrip(),
        row(item_label, f"{receipt.paid_amount:.2f}"),
        f"  {party_label}: {receipt.account_name}",
        f"  {labels['reference']}: {receipt.account_code}",
        f"  {labels['method']}: {method}",
        separator.rstrip(),
        row(labels["previous_balance"], f"{receipt.previous_balance:.2f}"),
        row(labels["paid"], f"{receipt.paid_amount:.2f}"),
        row(labels["new_balance"], f"{receipt.new_balance:.2f} ({sign_label})"),
        separator.rstrip(),
        f"{labels['printed']}: {receipt.print_timestamp:%d/%m/%Y %H:%M}",
    ]
    return lines
