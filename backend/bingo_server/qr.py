from __future__ import annotations

import base64
from io import BytesIO

import qrcode
from PIL import Image


def make_qr_png_bytes(data: str, *, box_size: int = 6, border: int = 2) -> bytes:
    qr = qrcode.QRCode(
        version=None,
        error_correction=qrcode.constants.ERROR_CORRECT_M,
        box_size=box_size,
        border=border,
    )
    qr.add_data(data)
    qr.make(fit=True)
    img: Image.Image = qr.make_image(fill_color="black", back_color="white").convert("RGB")
    buf = BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


def make_qr_data_url(data: str) -> str:
    encoded = base64.b64encode(make_qr_png_bytes(data)).decode("ascii")
    return f"data:image/png;base64,{encoded}"
