"""Property-based tests for AssocSet using Hypothesis."""

from typing import List

from hypothesis import assume, given
from hypothesis import strategies as st

from assoclist.set import AssocSet
from tests.assoclist.hypo import configure_hypo

configure_hypo()


# Dict elements are unhashable, so these exercise the equality-only path.
elements = st.dictionaries(
    st.sampled_from(["a", "b"]), st.integers(min_value=0, max_value=3), max_size=2
)


@st.composite
def set_strategy(draw: st.DrawFn, element_strategy=elements) -> AssocSet[dict]:
    values = draw(st.lists(element_strategy, min_size=0, max_size=20))
    return AssocSet.from_list(values)


def _count(aset: AssocSet[dict], value: dict) -> int:
    return sum(1 for elem in aset if elem == value)


@given(st.lists(elements, min_size=0, max_size=30))
def test_from_list_deduplicates(values: List[dict]):
    aset = AssocSet.from_list(values)
    for value in values:
        assert _count(aset, value) == 1
    for elem in aset:
        assert elem in values


@given(set_strategy(), elements)
def test_insert_idempotent(aset, value):
    once = aset.insert(value)
    twice = once.insert(value)
    assert twice.eq(once)
    assert twice.size() == once.size()
    assert once.size() <= aset.size() + 1


@given(set_strategy(), elements)
def test_remove(aset, value):
    removed = aset.remove(value)
    assert not removed.member(value)
    if aset.member(value):
        assert removed.size() == aset.size() - 1
    else:
        assert removed.eq(aset)


@given(set_strategy(), elements)
def test_remove_absent_is_identity(aset, value):
    assume(not aset.member(value))
    assert aset.remove(value) is aset


@given(set_strategy())
def test_list_roundtrip(aset):
    rebuilt = AssocSet.from_list(aset.to_list())
    assert rebuilt.size() == aset.size()
    assert rebuilt.eq(aset)


@given(set_strategy(), set_strategy())
def test_union_intersect_diff(s1, s2):
    union = s1.union(s2)
    inter = s1.intersect(s2)
    diff = s1.diff(s2)

    for elem in union:
        assert s1.member(elem) or s2.member(elem)
    for elem in s1:
        assert union.member(elem)
    for elem in s2:
        assert union.member(elem)

    for elem in inter:
        assert s1.member(elem) and s2.member(elem)
    for elem in diff:
        assert s1.member(elem) and not s2.member(elem)
    assert inter.size() + diff.size() == s1.size()


@given(set_strategy(), set_strategy())
def test_symdiff(s1, s2):
    sym = s1.symdiff(s2)
    for elem in sym:
        assert s1.member(elem) != s2.member(elem)
    assert sym.union(s1.intersect(s2)).eq(s1.union(s2))


@given(set_strategy(), st.integers(min_value=0, max_value=2))
def test_partition_complete(aset, limit):
    def pred(elem: dict) -> bool:
        return len(elem) > limit

    fst, snd = aset.partition(pred)
    assert fst.size() + snd.size() == aset.size()
    assert all(pred(elem) for elem in fst)
    assert not any(pred(elem) for elem in snd)


@given(set_strategy())
def test_map_never_grows(aset):
    mapped = aset.map(lambda elem: sorted(elem.keys()))
    assert mapped.size() <= aset.size()
    for elem in aset:
        assert mapped.member(sorted(elem.keys()))


@given(set_strategy())
def test_fold_visits_each_once(aset):
    visited = aset.fold(lambda elem, acc: acc + [elem], [])
    assert len(visited) == aset.size()
    assert AssocSet.from_list(visited) == aset
