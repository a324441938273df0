"""minitelnet: a blocking Telnet endpoint for scripted line exchange."""
# pylint: disable=wildcard-import,undefined-variable
from .config import *           # noqa
from .channel import *          # noqa
from .events import *           # noqa
from .interpreter import *      # noqa
from .session import *          # noqa
from .client import *           # noqa
from .telopt import *           # noqa
from .accessories import get_version as __get_version

__all__ = (
    config.__all__ +
    channel.__all__ +
    events.__all__ +
    interpreter.__all__ +
    session.__all__ +
    client.__all__ +
    telopt.__all__
)  # noqa

__license__ = 'ISC'
__version__ = __get_version()
