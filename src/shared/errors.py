from protean.exceptions import ProteanException


class RemoteServiceError(ProteanException):
    """A downstream service could not complete the request."""
