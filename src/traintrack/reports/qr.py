from __future__ import annotations

import io

import qrcode

from ..trainings.model import Training


def checkin_url(public_base_url: str, training: Training) -> str:
    """Link printed on the QR code; the front-end routes ``#/attend/...``."""
    return f"{public_base_url}#/attend/{training.workspace_id}/{training.training_id}"


def registration_url(public_base_url: str, training: Training) -> str:
    return f"{public_base_url}#/register/{training.workspace_id}/{training.training_id}"


def render_qr_png(data: str, *, box_size: int = 10, border: int = 2) -> bytes:
    qr = qrcode.QRCode(
        version=1,
        error_correction=qrcode.constants.ERROR_CORRECT_L,
        box_size=box_size,
        border=border,
    )
    qr.add_data(data)
    qr.make(fit=True)

    img = qr.make_image(fill_color="black", back_color="white")

    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()
