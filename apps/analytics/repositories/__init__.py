from .query_builder import ScopedQueryBuilder, ALL_MARKETS
from .performance import monitor_query_performance
from .cached import cache_heavy_query

__all__ = ['ScopedQueryBuilder', 'ALL_MARKETS', 'monitor_query_performance', 'cache_heavy_query']
