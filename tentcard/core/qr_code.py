"""QR code images for card payloads."""
import qrcode
from PIL import Image

from tentcard.config import QR_CHARACTER_SET

QR_BORDER_MODULES = 1
QR_BOX_SIZE = 10


def payload_bytes(payload: str, character_set: str = QR_CHARACTER_SET) -> bytes:
    """Encode payload in the preferred character set, UTF-8 if it does not fit."""
    try:
        return payload.encode(character_set)
    except UnicodeEncodeError:
        return payload.encode("utf-8")


class QrEncoder:
    """Code-mark encoder: payload string -> black-on-white RGB image."""

    def __init__(self, character_set: str = QR_CHARACTER_SET) -> None:
        self.character_set = character_set

    def encode(self, payload: str) -> Image.Image:
        qr = qrcode.QRCode(
            error_correction=qrcode.constants.ERROR_CORRECT_L,
            box_size=QR_BOX_SIZE,
            border=QR_BORDER_MODULES,
        )
        qr.add_data(payload_bytes(payload, self.character_set))
        qr.make(fit=True)
        return qr.make_image(fill_color="black", back_color="white").convert("RGB")
