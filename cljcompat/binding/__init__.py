"""Call binding: arity dispatch, keyword resolution and destructuring."""

from cljcompat.binding.shape import ParameterShape, Default, check_arities
from cljcompat.binding.resolved import ResolvedArguments
from cljcompat.binding.bind import bind_call, resolve_keywords, select_shape, pairs_to_mapping
from cljcompat.binding.destructure import Pattern, Opt, Keys, destructure
from cljcompat.binding.multifn import MultiFn, TailCall, recur, tail_call

__all__ = [
    "ParameterShape",
    "Default",
    "check_arities",
    "ResolvedArguments",
    "bind_call",
    "resolve_keywords",
    "select_shape",
    "pairs_to_mapping",
    "Pattern",
    "Opt",
    "Keys",
    "destructure",
    "MultiFn",
    "TailCall",
    "recur",
    "tail_call",
]
