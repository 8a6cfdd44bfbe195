# energywise/errors.py


class EnergyWiseError(Exception):
    """Base error carrying a classification code and the HTTP status the API answers with."""

    code = "ERROR"
    status_code = 500

    def __init__(self, message=None):
        super().__init__(message or self.code)
        self.message = message or self.code

    def to_dict(self):
        return {"status": "error", "code": self.code, "message": self.message}


class InvalidInput(EnergyWiseError):
    code = "INVALID_INPUT"
    status_code = 400


class NotFound(EnergyWiseError):
    code = "NOT_FOUND"
    status_code = 404


class GenerationFailed(EnergyWiseError):
    """The external text generator errored or returned unusable output."""

    code = "GENERATION_FAILED"
    status_code = 502


class PersistFailed(EnergyWiseError):
    code = "PERSIST_FAILED"
    status_code = 500
