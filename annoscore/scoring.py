# License: BSD3

"""
Unit scoring functions

A scoring function takes the query word and the texts of the tokens
covered by a unit, and returns a float ::

    score = scorer('test', ['test'])

Scoring functions must be pure: the same arguments always give the
same score, and nothing is remembered from one unit to the next.
They are referred to by name in configuration (see `SCORERS`).
"""


def constant_score(query_word, tokens):
    """
    Every unit is worth 1.0, whatever it covers
    """
    return 1.0


def match_ratio(query_word, tokens):
    """
    Proportion of the covered tokens that are exactly the query word
    (0.0 if there are no tokens)
    """
    if not tokens:
        return 0.0
    hits = sum(1 for tok in tokens if tok == query_word)
    return float(hits) / len(tokens)


SCORERS = {
    'constant': constant_score,
    'match-ratio': match_ratio,
}
"""
Scoring functions by name
"""


def get_scorer(name):
    """
    The scoring function registered under the given name
    """
    if name not in SCORERS:
        oops = "unknown scorer '%s' (known: %s)" %\
            (name, ", ".join(sorted(SCORERS)))
        raise ValueError(oops)
    return SCORERS[name]
