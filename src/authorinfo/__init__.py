# ABOUTME: Wikipedia author information connector for library discovery catalogs
# ABOUTME: Exposes the lookup service and the AuthorInfo result model

from authorinfo.core.models import AuthorInfo, LookupRequest

__version__ = "0.1.0"

__all__ = ["AuthorInfo", "LookupRequest", "__version__"]
