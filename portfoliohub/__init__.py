"""PortfolioHub volunteer/mentor project matching."""

from portfoliohub.utils.constants import APP_NAME as __app_name__
from portfoliohub.utils.constants import VERSION as __version__

__all__ = ["__app_name__", "__version__"]
