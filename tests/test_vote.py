
import sys
import os
import itertools
import random

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))
import rcvlib.vote
from rcvlib.candidate import Candidate
from rcvlib.vote import Ballot, InvalidBallot, RankPermutationValidator


def check_validation(validator, ranks, is_ok, error=InvalidBallot):
    if is_ok:
        validator.validate(ranks)
    else:
        with pytest.raises(error):
            validator.validate(ranks)


def is_permutation(ranks, n):
    return sorted(ranks) == list(range(1, n + 1))


@pytest.mark.parametrize(('n', 'ranks'), [
    (n, perm)
    for n in range(1, 5)
    for perm in itertools.permutations(range(1, n + 1))
])
def test_all_permutations_valid(n, ranks):
    validator = RankPermutationValidator(n)
    validator.validate(ranks)
    validator.validate(list(ranks))
    assert validator.is_valid(ranks)


@pytest.mark.parametrize(('n', 'ranks'), [
    (n, tuple(random.choices(range(0, n + 2), k=k)))
    for n in range(1, 6)
    for k in range(0, n + 2)
    for try_i in range(5)
])
def test_random_rankings(n, ranks):
    check_validation(
        RankPermutationValidator(n), ranks, is_permutation(ranks, n)
    )


@pytest.mark.parametrize(('ranks', 'reason'), [
    ([1, 1, 3], 'duplicated'),
    ([3, 3, 3], 'duplicated'),
    ([1, 2], '2 ranks given'),
    ([1, 2, 3, 4], '4 ranks given'),
    ([], '0 ranks given'),
    ([0, 1, 2], 'out of range'),
    ([1, 2, 4], 'out of range'),
    ([-1, 2, 3], 'out of range'),
    ([1, 2, '3'], 'non-integer'),
    ([1.0, 2, 3], 'non-integer'),
    ([True, 2, 3], 'non-integer'),
    ([1, 2, None], 'non-integer'),
    ('123', 'not a sequence'),
    (None, 'not a sequence'),
    ({1, 2, 3}, 'not a sequence'),
])
def test_invalid_reasons(ranks, reason):
    validator = RankPermutationValidator(3)
    with pytest.raises(InvalidBallot) as excinfo:
        validator.validate(ranks)
    assert reason in excinfo.value.reason
    assert excinfo.value.ranks is ranks
    assert excinfo.value.n_candidates == 3
    assert not validator.is_valid(ranks)


def test_invalid_ballot_is_vote_error():
    assert issubclass(InvalidBallot, rcvlib.vote.VoteError)
    with pytest.raises(rcvlib.vote.VoteError):
        RankPermutationValidator(2).validate([2, 2])


def test_invalid_ballot_message():
    err = InvalidBallot([1, 1, 3], 3, 'duplicated ranks')
    assert str(err) == (
        'invalid ballot: [1, 1, 3] (duplicated ranks),'
        ' must be a permutation of 1 to 3'
    )


def test_ballot_ranks_immutable():
    source = [2, 3, 1]
    ballot = Ballot(source)
    source[0] = 1
    assert ballot.ranks == (2, 3, 1)
    with pytest.raises(AttributeError):
        ballot.ranks = (1, 2, 3)


def test_preference_order():
    assert Ballot([2, 3, 1]).preference_order() == [2, 0, 1]
    assert Ballot([1]).preference_order() == [0]


def _roster(n, eliminated=()):
    roster = [Candidate(name) for name in 'ABCDE'[:n]]
    for i in eliminated:
        roster[i].eliminate()
    return roster


@pytest.mark.parametrize(('ranks', 'eliminated', 'top'), [
    ((1, 2, 3, 4), (), 0),
    ((2, 3, 1, 4), (), 2),
    ((1, 2, 3, 4), (0, ), 1),
    ((1, 2, 3, 4), (0, 1), 2),
    ((1, 2, 3, 4), (1, 0, 2), 3),
    ((4, 3, 2, 1), (3, ), 2),
    ((4, 3, 2, 1), (3, 1), 2),
    ((4, 3, 2, 1), (3, 2), 1),
    ((2, 4, 1, 3), (2, 0), 3),
    ((1, 2, 3, 4), (0, 1, 2, 3), None),
])
def test_top_candidate(ranks, eliminated, top):
    assert Ballot(ranks).top_candidate(_roster(4, eliminated)) == top
