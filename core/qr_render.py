# core/qr_render.py
import segno
from config.settings import settings
from util.enums import ErrorMessage
from util.errors import AppError


class QrSvgRenderer:
    """
    Render text as a standalone SVG QR code.

    Text beyond the symbol capacity for the configured error level (2331 bytes at "M")
    is a validation failure, not a server fault.
    """

    def __init__(
        self,
        error: str = settings.QR_ERROR_LEVEL,
        border: int = settings.QR_BORDER,
        scale: int = settings.QR_SCALE,
        dark: str = settings.QR_DARK,
        light: str = settings.QR_LIGHT,
    ) -> None:
        self._error = error.lower()
        self._border = border
        self._scale = scale
        self._dark = dark
        self._light = light

    def render(self, text: str) -> bytes:
        try:
            qr = segno.make(text, error=self._error, micro=False)
        except segno.DataOverflowError:
            raise AppError.of(
                ErrorMessage.VALIDATION_ERROR.value,
                "text: too long to encode as a QR code",
            )
        svg = qr.svg_inline(
            scale=self._scale, border=self._border, dark=self._dark, light=self._light
        )
        return svg.encode("utf-8")
