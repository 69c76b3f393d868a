"""Excepciones de dominio para el sistema de reservas de autos."""


class DomainError(Exception):
    """Clase base para todos los errores de dominio."""

    http_status: int = 500

    def __init__(self, message: str, code: str | None = None):
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(self.message)

    @property
    def details(self) -> dict:
        """Campos extra que la API agrega al cuerpo de error."""
        return {}


# === Familias (mapeadas a HTTP en la capa API) ===


class ValidationError(DomainError):
    """Entrada malformada o fuera de política."""

    http_status = 400

    def __init__(self, message: str, field: str | None = None, code: str | None = None):
        super().__init__(message=message, code=code or "VALIDATION_ERROR")
        self.field = field


class UnauthorizedError(DomainError):
    """El llamador no está autenticado."""

    http_status = 401

    def __init__(self, message: str = "Unauthorized", code: str | None = None):
        super().__init__(message=message, code=code or "UNAUTHORIZED")


class ForbiddenError(DomainError):
    """
    El llamador está autenticado pero no autorizado para esta instancia.

    El mensaje es genérico: nunca revela si el recurso objetivo existe.
    """

    http_status = 403

    def __init__(
        self,
        message: str = "Forbidden: Not authorized to access this resource",
        code: str | None = None,
    ):
        super().__init__(message=message, code=code or "FORBIDDEN")


class NotFoundError(DomainError):
    """El recurso no existe."""

    http_status = 404

    def __init__(self, message: str, code: str | None = None):
        super().__init__(message=message, code=code or "NOT_FOUND")


class ConflictError(DomainError):
    """Violación de la máquina de estados o conflicto de concurrencia."""

    http_status = 409

    def __init__(self, message: str, code: str | None = None):
        super().__init__(message=message, code=code or "CONFLICT")


class PreconditionFailedError(DomainError):
    """El estado actual del recurso no permite la operación."""

    http_status = 400

    def __init__(self, message: str, code: str | None = None):
        super().__init__(message=message, code=code or "PRECONDITION_FAILED")


# === Errores de Booking ===


class BookingNotFoundError(NotFoundError):
    def __init__(self, booking_id: str):
        super().__init__(message="Booking not found", code="BOOKING_NOT_FOUND")
        self.booking_id = booking_id


class BookingNotEditableError(PreconditionFailedError):
    """La reserva ya avanzó más allá de CLAIMED."""

    def __init__(self, booking_id: str, current_status: str):
        super().__init__(
            message="ไม่สามารถแก้ไขการจองได้หลังจากยืนยันรับรถแล้ว",
            code="BOOKING_NOT_EDITABLE",
        )
        self.booking_id = booking_id
        self.current_status = current_status


class ReturnDateShortenedError(ConflictError):
    """La fecha de devolución solo puede extenderse."""

    http_status = 400

    def __init__(self, booking_id: str):
        super().__init__(
            message="ไม่สามารถลดวันที่คืนรถได้ สามารถเพิ่มวันที่คืนรถได้เท่านั้น",
            code="RETURN_DATE_SHORTENED",
        )
        self.booking_id = booking_id


class InvalidLeadTransitionError(ConflictError):
    """Transición de estado de lead no permitida."""

    http_status = 400

    def __init__(self, current_status: str, requested_status: str):
        super().__init__(
            message=f"Invalid status transition from {current_status} to {requested_status}",
            code="INVALID_LEAD_TRANSITION",
        )
        self.current_status = current_status
        self.requested_status = requested_status


class OptimisticLockError(ConflictError):
    """Conflicto de concurrencia al actualizar la reserva."""

    def __init__(self, booking_id: str, expected_version: int):
        super().__init__(
            message="Booking was modified by another request, please retry",
            code="OPTIMISTIC_LOCK_ERROR",
        )
        self.booking_id = booking_id
        self.expected_version = expected_version


class InvalidDateRangeError(ValidationError):
    """Rango de fechas inválido."""

    def __init__(self, message: str):
        super().__init__(message=message, code="INVALID_DATE_RANGE")


# === Errores de Car / reserva temporal ===


class CarNotFoundError(NotFoundError):
    def __init__(self, car_id: str):
        super().__init__(message="Car not found", code="CAR_NOT_FOUND")
        self.car_id = car_id


class CarUnavailableError(ValidationError):
    def __init__(self, car_id: str):
        super().__init__(message="Car is not available for booking", code="CAR_UNAVAILABLE")
        self.car_id = car_id


class CarOnHoldError(ConflictError):
    """Otro cliente tiene una reserva temporal (NEW) vigente sobre el auto."""

    def __init__(self, car_id: str):
        super().__init__(
            message="รถคันนี้กำลังถูกจองโดยผู้อื่น กรุณารอสักครู่หรือเลือกรถคันอื่น",
            code="CAR_ON_HOLD",
        )
        self.car_id = car_id


class BookingOverlapError(ConflictError):
    def __init__(self, car_id: str):
        super().__init__(
            message="รถคันนี้ถูกจองในช่วงวันที่ที่คุณเลือกแล้ว กรุณาเลือกวันที่อื่นหรือเลือกรถคันอื่น",
            code="BOOKING_OVERLAP",
        )
        self.car_id = car_id


class AccountSuspendedError(ForbiddenError):
    def __init__(self):
        super().__init__(message="Your account has been suspended", code="ACCOUNT_SUSPENDED")


class CarLockedError(ConflictError):
    """Otra sesión tiene el bloqueo de checkout vigente sobre el auto."""

    def __init__(self, car_id: str, remaining_minutes: int):
        super().__init__(
            message=f"รถคันนี้กำลังถูกจองโดยผู้อื่น กรุณารอประมาณ {remaining_minutes} นาที หรือเลือกรถคันอื่น",
            code="CAR_LOCKED",
        )
        self.car_id = car_id
        self.remaining_minutes = remaining_minutes

    @property
    def details(self) -> dict:
        return {"locked": True, "locked_by_other": True, "remaining_minutes": self.remaining_minutes}


class InvalidApprovalStatusError(ValidationError):
    def __init__(self, status: str):
        super().__init__(
            message="Valid status (APPROVED or REJECTED) is required",
            field="status",
            code="INVALID_APPROVAL_STATUS",
        )
        self.status = status


# === Errores de Usuario ===


class UserNotFoundError(NotFoundError):
    def __init__(self):
        super().__init__(message="User not found or suspended", code="USER_NOT_FOUND")


# === Errores de Partner ===


class UnknownPartnerError(ValidationError):
    """Referencia a un partner inexistente dentro de un payload."""

    def __init__(self, partner_id: str):
        super().__init__(message="Partner not found", field="partner_id", code="PARTNER_NOT_FOUND")
        self.partner_id = partner_id


# === Errores de Comisión ===


class CommissionNotFoundError(NotFoundError):
    def __init__(self, commission_id: str):
        super().__init__(message="Commission log not found", code="COMMISSION_NOT_FOUND")
        self.commission_id = commission_id


class CommissionAlreadyPaidError(ConflictError):
    """PENDING -> PAID es de un solo sentido y ocurre una sola vez."""

    http_status = 400

    def __init__(self, commission_id: str):
        super().__init__(
            message="Commission already marked as paid",
            code="COMMISSION_ALREADY_PAID",
        )
        self.commission_id = commission_id


# === Errores de API Key ===


class ApiKeyNotFoundError(NotFoundError):
    def __init__(self, api_key_id: str):
        super().__init__(message="API key not found", code="API_KEY_NOT_FOUND")
        self.api_key_id = api_key_id


class InvalidApiKeyError(UnauthorizedError):
    def __init__(self):
        super().__init__(
            message="Invalid or missing API key. Provide X-API-Key header.",
            code="INVALID_API_KEY",
        )


class ApiKeyPermissionError(ForbiddenError):
    def __init__(self, permission: str):
        super().__init__(
            message=f"API key missing required permission: {permission}",
            code="API_KEY_PERMISSION_DENIED",
        )
        self.permission = permission


class ApiKeyNotLinkedError(ForbiddenError):
    def __init__(self):
        super().__init__(
            message="This API key is not linked to a partner",
            code="API_KEY_NOT_LINKED",
        )
