# Core type aliases and public surface for cljcompat.
# Runtime values are plain Python objects (numbers, strings, Keywords, records)
# plus the two immutable sequence variants from cljcompat.types.sequence.
#
# Naming guidance:
# - LispValue: any runtime value flowing through sequences, binders and records.
# - BodyFn:    a Python callable used as the body of a MultiFn variant.

from typing import Any, Callable

# Runtime value alias
LispValue = Any
# Body of a multi-arity function variant
BodyFn = Callable[..., LispValue]

from cljcompat.errors import (  # noqa: E402
    CompatError,
    OutOfRange,
    NotASequence,
    ArityMismatch,
    MalformedKeywordArgs,
    UnknownKeyword,
    PatternMismatch,
    MissingRequiredField,
    UnknownField,
    InvalidShape,
    InvalidPattern,
)
from cljcompat.types.markers import ABSENT, UNSET, NOT_FOUND  # noqa: E402
from cljcompat.types.keyword import Keyword  # noqa: E402
from cljcompat.types.sequence import LinkedSequence, IndexedSequence  # noqa: E402
from cljcompat.config import BindOptions  # noqa: E402
from cljcompat.runtime_context import DynamicContext  # noqa: E402
from cljcompat.binding import (  # noqa: E402
    ParameterShape,
    Default,
    ResolvedArguments,
    bind_call,
    resolve_keywords,
    Pattern,
    Opt,
    Keys,
    destructure,
    MultiFn,
    recur,
)
from cljcompat.records import Record, RecordType, construct, defrecord  # noqa: E402
