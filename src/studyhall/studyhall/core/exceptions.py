class DomainError(Exception):
    """Base exception for business rule violations."""

    code = "DOMAIN_ERROR"


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    code = "VALIDATION_ERROR"


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""

    code = "FORBIDDEN"


class NotFoundError(DomainError):
    """Raised when a referenced record does not exist."""

    code = "NOT_FOUND"


class AccountNotApprovedError(AuthorizationError):
    code = "ACCOUNT_NOT_APPROVED"

    def __init__(self) -> None:
        super().__init__("Your account needs to be approved by an administrator before you can book seats.")


class InvalidShiftError(ValidationError):
    code = "INVALID_SHIFT"

    def __init__(self, shift_id) -> None:
        super().__init__(f"Unknown shift: {shift_id!r}")
        self.shift_id = shift_id


class InvalidSeatError(ValidationError):
    code = "INVALID_SEAT"

    def __init__(self, seat_number) -> None:
        super().__init__(f"Unknown seat: {seat_number!r}")
        self.seat_number = seat_number


class OutsideShiftWindowError(ValidationError):
    """Raised when an action is attempted outside the shift's active window."""

    code = "OUTSIDE_SHIFT_WINDOW"

    def __init__(self, shift_id: str) -> None:
        super().__init__(f"The {shift_id} shift is not active right now")
        self.shift_id = shift_id


class ShiftNotPaidError(ValidationError):
    """Raised when a user acts on a shift outside their paid admissions."""

    code = "SHIFT_NOT_PAID"

    def __init__(self, shift_id: str) -> None:
        super().__init__(f"The {shift_id} shift is not part of your paid admission.")
        self.shift_id = shift_id


class AlreadyCheckedInError(ValidationError):
    code = "ALREADY_CHECKED_IN"

    def __init__(self, shift_id: str) -> None:
        super().__init__("You are already checked in for this shift.")
        self.shift_id = shift_id


class ShiftAlreadyCompletedError(ValidationError):
    code = "SHIFT_ALREADY_COMPLETED"

    def __init__(self, shift_id: str) -> None:
        super().__init__("You have already completed this shift today.")
        self.shift_id = shift_id


class SeatTakenError(ValidationError):
    code = "SEAT_TAKEN"

    def __init__(self, seat_number: str, shift_id: str) -> None:
        super().__init__(f"Seat {seat_number} is already booked for the {shift_id} shift.")
        self.seat_number = seat_number
        self.shift_id = shift_id


class UserAlreadyBookedError(ValidationError):
    code = "USER_ALREADY_BOOKED"

    def __init__(self, shift_id: str, seat_number: str | None = None) -> None:
        if seat_number:
            message = f"You've already booked seat {seat_number} for the {shift_id} shift."
        else:
            message = f"You've already booked a seat for the {shift_id} shift."
        super().__init__(message)
        self.shift_id = shift_id
        self.seat_number = seat_number


class ConflictError(DomainError):
    """Raised by repositories when a transactional precondition was lost to a concurrent writer."""

    code = "CONFLICT"
