"""
Contributor Scoring

Modules:
- models: Immutable pull-request, event and contributor records
- aggregator: Core scoring and ranking logic
- achievements: Badge catalog and evaluation
- leagues: League, roster and summary views over a ranking
"""


def __getattr__(name):
    """Lazy imports to avoid RuntimeWarning when running modules directly."""
    if name == "aggregate_contributors":
        from phantoms.scoring.aggregator import aggregate_contributors
        return aggregate_contributors
    if name == "leaderboard_dataframe":
        from phantoms.scoring.aggregator import leaderboard_dataframe
        return leaderboard_dataframe
    if name == "ContributorScore":
        from phantoms.scoring.models import ContributorScore
        return ContributorScore
    if name == "ScoringConfig":
        from phantoms.scoring.models import ScoringConfig
        return ScoringConfig
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
