import pytest

from cljcompat.sequences import indexed, linked

# Sequence tests take a `make_seq` fixture so that every case runs twice:
# 1) against LinkedSequence ["linked"]
# 2) against IndexedSequence ["indexed"]
# Both variants must give identical observable results for in-bounds access.


@pytest.fixture(params=["linked", "indexed"])
def seq_variant(request):
    return request.param


@pytest.fixture
def make_seq(seq_variant):
    return linked if seq_variant == "linked" else indexed


@pytest.fixture(autouse=True)
def _default_bind_options(monkeypatch):
    # Keep a developer's CLJCOMPAT_STRICT_KEYWORDS from leaking into tests
    monkeypatch.delenv("CLJCOMPAT_STRICT_KEYWORDS", raising=False)
