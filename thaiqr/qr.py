"""
Turn finished payload strings into QR images.

The payload is the whole contract; this module only drives the ``qrcode``
library and hands back a PNG data URL or SVG markup.
"""

import base64
import io
import logging
from typing import Optional

import qrcode
from PIL import Image
from qrcode.image.svg import SvgPathImage

from thaiqr.models import QrOptions
from thaiqr.promptpay import Amount, build_bill_payment_payload, build_promptpay_payload

logger = logging.getLogger(__name__)

_ERROR_CORRECTION = {
    "L": qrcode.constants.ERROR_CORRECT_L,
    "M": qrcode.constants.ERROR_CORRECT_M,
    "Q": qrcode.constants.ERROR_CORRECT_Q,
    "H": qrcode.constants.ERROR_CORRECT_H,
}


def _make_qr(payload: str, options: QrOptions, **kwargs) -> qrcode.QRCode:
    qr = qrcode.QRCode(
        error_correction=_ERROR_CORRECTION[options.error_correction],
        border=options.margin,
        **kwargs,
    )
    qr.add_data(payload)
    qr.make(fit=True)
    return qr


def render_qr_png(payload: str, options: Optional[QrOptions] = None) -> bytes:
    options = options or QrOptions()
    try:
        qr = _make_qr(payload, options)
        side = qr.modules_count + 2 * options.margin
        qr.box_size = max(1, options.width // side)
        img = qr.make_image(fill_color=options.dark_color, back_color=options.light_color).get_image()
        if options.width >= side and img.size[0] != options.width:
            img = img.resize((options.width, options.width), Image.NEAREST)
        bio = io.BytesIO()
        img.save(bio, format="PNG")
    except Exception:
        logger.exception("Error generating QR code")
        raise
    return bio.getvalue()


def render_qr_data_url(payload: str, options: Optional[QrOptions] = None) -> str:
    png = render_qr_png(payload, options)
    return "data:image/png;base64," + base64.b64encode(png).decode("utf-8")


def render_qr_svg(payload: str, options: Optional[QrOptions] = None) -> str:
    options = options or QrOptions()
    try:
        qr = _make_qr(payload, options, image_factory=SvgPathImage)
        bio = io.BytesIO()
        qr.make_image().save(bio)
    except Exception:
        logger.exception("Error generating QR code SVG")
        raise
    return bio.getvalue().decode("utf-8")


def generate_promptpay_qr(target: str, amount: Amount = None, options: Optional[QrOptions] = None) -> str:
    return render_qr_data_url(build_promptpay_payload(target, amount), options)


def generate_promptpay_qr_svg(target: str, amount: Amount = None) -> str:
    return render_qr_svg(build_promptpay_payload(target, amount))


def generate_bank_transfer_qr(
    bank_code: str,
    account_number: str,
    amount: Amount = None,
    reference1: Optional[str] = None,
    reference2: Optional[str] = None,
    options: Optional[QrOptions] = None,
) -> str:
    payload = build_bill_payment_payload(bank_code, account_number, amount, reference1, reference2)
    return render_qr_data_url(payload, options)
