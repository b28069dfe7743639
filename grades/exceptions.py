"""
Errors raised by the grades app. The views turn these into JSON responses.
"""


class GradesError(Exception):
    status = 400

    def __init__(self, message):
        super(GradesError, self).__init__(message)
        self.message = message


class NotFound(GradesError):
    """ The requested record does not exist."""
    status = 404

    def __init__(self, model_name, requested_id):
        self.model_name = model_name
        self.requested_id = requested_id
        super(NotFound, self).__init__('{0} {1} not found'.format(model_name,
                                                                 requested_id))


class Forbidden(GradesError):
    """ The actor may not perform the action."""
    status = 403


class PersistenceError(GradesError):
    """ A write to the database failed; ``detail`` has the underlying reason."""
    status = 400

    def __init__(self, message, detail=''):
        super(PersistenceError, self).__init__(message)
        self.detail = detail
