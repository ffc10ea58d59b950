class BankException(Exception):
    '''
    Base class for all errors that bank reports to the user. The argparse
    gateway catches these and turns them into a log message and exit status 1.
    '''

class ValidationError(BankException):
    pass

class ParseError(BankException):
    pass

class NotFoundError(BankException):
    pass

class FilesystemError(BankException):
    def __init__(self, message, path, error=None):
        self.path = path
        self.error = error
        if error is not None and getattr(error, 'strerror', None):
            message = f'{message}: {error.strerror}'
        self.args = (message,)

class UnsupportedOperationError(BankException):
    pass

class NoAnswerError(BankException):
    pass
