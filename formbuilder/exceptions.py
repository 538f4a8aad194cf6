class FormBuilderException(Exception):
    pass


class SchemaIntrospectionFailed(FormBuilderException):
    pass


class TableNotFound(SchemaIntrospectionFailed):
    pass


class SchemaError(FormBuilderException):
    pass


class UnsupportedColumnType(FormBuilderException):
    pass


class MalformedEnumLiteral(FormBuilderException):
    pass


class InvalidFieldSelection(FormBuilderException):
    pass


class InvalidRequestMethod(FormBuilderException):
    pass


class ConstraintViolation(FormBuilderException):
    pass


class SubmissionError(FormBuilderException):
    """Base for errors raised while handling a submitted form."""

    user_message = "The form could not be submitted."


class CsrfValidationFailed(SubmissionError):
    user_message = "Your session has expired or the form was tampered with. Please reload and try again."


class PersistenceFailed(SubmissionError):
    user_message = "The record could not be saved. Please try again later."
