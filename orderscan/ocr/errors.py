"""Exceptions raised by the OCR layer."""


class OCRExtractionError(RuntimeError):
    """The OCR engine could not produce text for an image."""

    def __init__(self, message: str = "Could not extract text from image") -> None:
        super().__init__(message)
