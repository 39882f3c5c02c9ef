class CompatError(Exception):
    """ Base class for all cljcompat errors"""
    pass

class OutOfRange(CompatError, IndexError):
    """ Raised when an index or range falls outside a sequence's bounds"""

class NotASequence(CompatError, TypeError):
    """ Raised when a sequence operation is given something that is not a sequence"""

class ArityMismatch(CompatError):
    """ Raised when no parameter shape fits the number of positional arguments"""

class MalformedKeywordArgs(CompatError):
    """ Raised when the keyword region of a call is not made of key/value pairs"""

class UnknownKeyword(MalformedKeywordArgs):
    """ Raised in strict mode when a keyword is not part of the keyword-spec"""

class PatternMismatch(CompatError):
    """ Raised when a destructuring pattern needs more elements than the value has"""

class MissingRequiredField(CompatError):
    """ Raised when a required record field has neither a value nor a default"""

class UnknownField(CompatError, AttributeError):
    """ Raised when a record field is not declared by its record type"""

class InvalidShape(CompatError, ValueError):
    """ Raised when a set of parameter shapes cannot be dispatched unambiguously"""

class InvalidPattern(CompatError, ValueError):
    """ Raised when a destructuring pattern is malformed"""
