"""Hypothesis strategies shared by the test modules"""
from hypothesis import strategies as st

from models import Person, SplitRecord

NAMES = ["Alice", "Bob", "Carol", "Dave", "Erin", "Frank"]

amounts = st.integers(min_value=1, max_value=1_000_000).map(lambda c: c / 100)


@st.composite
def records_strategy(draw, max_size=25):
    """Random ledgers over a small pool of names so people overlap"""
    n = draw(st.integers(min_value=0, max_value=max_size))
    out = []
    for _ in range(n):
        frm = draw(st.sampled_from(NAMES))
        to = draw(st.sampled_from([p for p in NAMES if p != frm]))
        out.append(SplitRecord(Person(frm), Person(to), draw(amounts)))
    return out
