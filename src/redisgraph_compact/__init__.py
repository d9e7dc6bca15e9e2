"""RedisGraph Compact: typed decoding of RedisGraph compact result sets."""

__version__ = "0.1.0"
