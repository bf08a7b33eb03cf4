"""
The main kubeshift module for all the exported functions & classes.
"""
# isort: skip_file

# Unlike all other places, where we import other modules and refer
# the functions via the modules, this is the library's top-level interface,
# as it is seen by the users. So, we export the individual functions.

from kubeshift._cogs.clients.api import (
    Response,
    Transport,
    APITransport,
)
from kubeshift._cogs.clients.auth import (
    APIContext,
)
from kubeshift._cogs.clients.errors import (
    KubeshiftError,
    DiscoveryError,
    MissingNamespaceError,
    UnsupportedVerbError,
    UnknownMethodError,
    APIError,
    APIUnauthorizedError,
    APIForbiddenError,
    APINotFoundError,
    APIConflictError,
)
from kubeshift._cogs.configs.configuration import (
    ClientSettings,
    NetworkingSettings,
    DiscoverySettings,
    NamingSettings,
)
from kubeshift._cogs.helpers.typedefs import (
    Logger,
)
from kubeshift._cogs.helpers.versions import (
    version as __version__,
)
from kubeshift._cogs.structs.credentials import (
    ConnectionInfo,
)
from kubeshift._core.actions.loggers import (
    LogFormat,
    configure,
)
from kubeshift._core.methods.arguments import (
    CallArguments,
)
from kubeshift._core.reactor.building import (
    build,
)
from kubeshift._core.reactor.tables import (
    ClientSpec,
    DynamicClient,
    Method,
    MethodSpec,
    MethodTable,
)

__all__ = [
    'build',
    'DynamicClient', 'Method', 'MethodSpec', 'MethodTable', 'ClientSpec',
    'CallArguments',
    'ConnectionInfo',
    'ClientSettings', 'NetworkingSettings', 'DiscoverySettings', 'NamingSettings',
    'Response', 'Transport', 'APITransport', 'APIContext',
    'KubeshiftError', 'DiscoveryError', 'MissingNamespaceError',
    'UnsupportedVerbError', 'UnknownMethodError',
    'APIError', 'APIUnauthorizedError', 'APIForbiddenError',
    'APINotFoundError', 'APIConflictError',
    'LogFormat', 'configure',
    'Logger',
    '__version__',
]
