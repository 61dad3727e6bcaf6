"""Rcvlib - a library for evaluating single-seat ranked-choice elections.

Rcvlib evaluates elections under instant-runoff voting: the candidate with
the fewest first-choice votes is repeatedly eliminated and their ballots
transferred to the next preference until someone holds a majority or all
remaining candidates are tied.

The pieces of the evaluation are:

-   Who stands in the election. The :mod:`candidate` module holds the
    :class:`Candidate` objects that collect the ballots counting for them.
-   What forms of votes are valid. Each ballot must rank all candidates;
    the :mod:`vote` module validates the rankings and represents the
    accepted ballots.
-   How to determine who is elected. The :class:`Election` object from the
    :mod:`election` module keeps the roster and the ballots and runs the
    count.
"""
