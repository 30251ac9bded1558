"""
Errores de dominio del servicio de reservas.

NotFoundError cubre tanto la ausencia de una entidad como la falta de
permiso sobre ella: el llamante no puede distinguir ambos casos.
"""


class ShareItError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(ShareItError):
    status_code = 404


class BookingValidationError(ShareItError):
    status_code = 400
