"""
PromptPay / Bill Payment QR payloads (EMVCo-compliant) — Compatible with Thai banking apps.
"""

import logging
import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Callable, Dict, Optional, Tuple, Union

from thaiqr.errors import InvalidAmountError, MissingFieldError, PayloadError
from thaiqr.models import TargetClassification, TargetType
from thaiqr.tlv import MAX_VALUE_LENGTH, format_tlv, parse_tlv

logger = logging.getLogger(__name__)

Amount = Union[int, float, Decimal, None]

PROMPTPAY_AID = "A000000677010111"
BILL_PAYMENT_AID = "A000000677010112"
CURRENCY_THB = "764"
COUNTRY_TH = "TH"
CRC_PREFIX = "6304"
REFERENCE_MAX = 25

# containers parsed one level deeper by parse_payload
_CONTAINER_TAGS = {"29", "30"}


def crc16(payload: str) -> str:
    """CRC-16/CCITT-FALSE: poly 0x1021, init 0xFFFF, MSB first, no final XOR."""
    crc = 0xFFFF
    for c in payload.encode("utf-8"):
        crc ^= (c << 8)
        for _ in range(8):
            if (crc & 0x8000) != 0:
                crc = ((crc << 1) ^ 0x1021) & 0xFFFF
            else:
                crc = (crc << 1) & 0xFFFF
    return f"{crc:04X}"


def _digits(text: Optional[str]) -> str:
    return re.sub(r"[^0-9]", "", text or "")


# First match wins. Each rule: (type, predicate on digits, canonicalizer)
_TARGET_RULES: Tuple[Tuple[TargetType, Callable[[str], bool], Callable[[str], str]], ...] = (
    (TargetType.MOBILE, lambda d: len(d) == 10 and d.startswith("0"), lambda d: "0066" + d[1:]),
    (TargetType.MOBILE, lambda d: len(d) == 11 and d.startswith("66"), lambda d: "00" + d),
    (TargetType.NATIONAL_ID, lambda d: len(d) == 13, lambda d: d),
)


def classify_target(raw_target: Optional[str]) -> TargetClassification:
    """Work out which PromptPay proxy type a free-form identifier is.

    ``0812345678`` and ``66812345678`` both become mobile ``0066812345678``,
    13 digits are a national ID, and anything else falls back to e-wallet with
    the digits kept as-is (possibly empty).
    """
    digits = _digits(raw_target)
    for kind, matches, canonical in _TARGET_RULES:
        if matches(digits):
            return TargetClassification(kind, canonical(digits))
    return TargetClassification(TargetType.EWALLET, digits)


def _normalize_amount(amount: Amount) -> Optional[Decimal]:
    if amount is None:
        return None
    try:
        value = Decimal(str(amount))
    except InvalidOperation:
        raise InvalidAmountError(amount) from None
    if not value.is_finite():
        raise InvalidAmountError(amount) from None
    return value


def _is_dynamic(amount: Optional[Decimal]) -> bool:
    return amount is not None and amount > 0


def _format_amount(amount: Decimal) -> str:
    # half-up, so 100.125 -> "100.13"
    return f"{amount.quantize(Decimal('0.01'), rounding=ROUND_HALF_UP):f}"


def _finish(merchant_tag: str, merchant_info: str, amount: Optional[Decimal]) -> str:
    dynamic = _is_dynamic(amount)
    pfi = format_tlv("00", "01")
    poi = format_tlv("01", "12" if dynamic else "11")
    mai = format_tlv(merchant_tag, merchant_info)
    currency = format_tlv("53", CURRENCY_THB)
    txn_amt = format_tlv("54", _format_amount(amount)) if dynamic else ""
    country = format_tlv("58", COUNTRY_TH)

    payload_wo_crc = pfi + poi + mai + currency + txn_amt + country + CRC_PREFIX
    return payload_wo_crc + crc16(payload_wo_crc)


def build_promptpay_payload(target: str, amount: Amount = None) -> str:
    """Build a PromptPay credit-transfer payload (merchant account tag 29).

    A positive ``amount`` makes the QR single-use (method ``12``) and embeds
    tag 54; otherwise the QR is static (``11``) and the payer types the amount.
    Non-finite amounts raise InvalidAmountError.
    """
    value = _normalize_amount(amount)
    target_info = classify_target(target)
    guid = format_tlv("00", PROMPTPAY_AID)
    acc = format_tlv(target_info.type_code, target_info.canonical_id)
    logger.debug("PromptPay payload type=%s dynamic=%s", target_info.type.name, _is_dynamic(value))
    return _finish("29", guid + acc, value)


def normalize_bank_code(bank_code: Optional[str]) -> str:
    return _digits(bank_code).rjust(3, "0")


def build_biller_id(bank_code: str, account_number: str) -> str:
    # accounts longer than 17 digits keep only their first 17
    return normalize_bank_code(bank_code) + _digits(account_number).rjust(17, "0")[:17]


def _bill_merchant_info(biller_id: str, reference1: str, reference2: str) -> str:
    info = format_tlv("00", BILL_PAYMENT_AID) + format_tlv("01", biller_id)
    if reference1:
        info += format_tlv("02", reference1)
    if reference2:
        info += format_tlv("03", reference2)
    return info


def build_bill_payment_payload(
    bank_code: str,
    account_number: str,
    amount: Amount = None,
    reference1: Optional[str] = None,
    reference2: Optional[str] = None,
) -> str:
    """Build a bill-payment payload (merchant account tag 30) for a bank account.

    Biller ID is the bank code padded to 3 digits followed by the account
    number padded to 17. References are cut to 25 characters, then reference2
    (and if need be reference1) is shortened further until tag 30 fits in 99
    bytes; two full 25-character references leave reference2 at 22.
    """
    missing = [name for name, value in (("bank_code", bank_code), ("account_number", account_number)) if not value]
    if missing:
        raise MissingFieldError(*missing)

    value = _normalize_amount(amount)
    biller_id = build_biller_id(bank_code, account_number)
    ref1 = (reference1 or "")[:REFERENCE_MAX]
    ref2 = (reference2 or "")[:REFERENCE_MAX]
    merchant_info = _bill_merchant_info(biller_id, ref1, ref2)
    while len(merchant_info.encode("utf-8")) > MAX_VALUE_LENGTH and (ref1 or ref2):
        if ref2:
            ref2 = ref2[:-1]
        else:
            ref1 = ref1[:-1]
        merchant_info = _bill_merchant_info(biller_id, ref1, ref2)

    logger.debug("Bill payment payload bank=%s dynamic=%s", normalize_bank_code(bank_code), _is_dynamic(value))
    return _finish("30", merchant_info, value)


def parse_payload(payload: str) -> Dict[str, Union[str, Dict[str, str]]]:
    """Read a payload back into ``{tag: value}``; tags 29/30 become nested dicts."""
    result: Dict[str, Union[str, Dict[str, str]]] = {}
    for field in parse_tlv(payload):
        if field.tag in _CONTAINER_TAGS:
            result[field.tag] = {sub.tag: sub.value for sub in parse_tlv(field.value)}
        else:
            result[field.tag] = field.value
    return result


def verify_payload(payload: str) -> bool:
    if len(payload) < 8 or payload[-8:-4] != CRC_PREFIX:
        return False
    return crc16(payload[:-4]) == payload[-4:]


def check_payload(payload: str) -> Dict[str, Union[str, Dict[str, str]]]:
    """Parse and verify in one go; raises PayloadError on a bad checksum."""
    fields = parse_payload(payload)
    if not verify_payload(payload):
        raise PayloadError("CRC mismatch")
    return fields
