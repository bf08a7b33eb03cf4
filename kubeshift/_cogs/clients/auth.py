import base64
import ssl

import aiohttp

from kubeshift._cogs.helpers import versions
from kubeshift._cogs.structs import credentials


class APIContext:
    """
    A container for an aiohttp session and the info for URL building.

    The container is constructed only once for every client, so that
    the authorization headers & TLS settings are attached once for all
    the discovery requests and all the methods' requests afterwards.

    A user-provided session is used as is and is not closed by the context:
    the owner of the session is responsible for closing it.
    """

    # The main contained object used by the API methods.
    session: aiohttp.ClientSession

    # Contextual information for URL building.
    server: str

    # Whether the session was made here, and so must be closed here.
    owned: bool

    def __init__(
            self,
            info: credentials.ConnectionInfo,
            *,
            session: aiohttp.ClientSession | None = None,
    ) -> None:
        super().__init__()

        if session is None:
            self.session = self.make_aiohttp_session(info)
            self.owned = True
        else:
            self.session = session
            self.owned = False

        # It is a good practice to self-identify a bit, even with a user-provided session.
        if self.session.headers.get('User-Agent') is None:
            self.session.headers['User-Agent'] = f'kubeshift/{versions.version or "unknown"}'

        self.server = info.server

    def make_aiohttp_session(self, info: credentials.ConnectionInfo) -> aiohttp.ClientSession:

        # The SSL part (CA verification only; client certificates are out of scope).
        context = ssl.create_default_context(
            cafile=info.ca_path,
            cadata=decode_to_pem(info.ca_data) if info.ca_data is not None else None,
        )
        if info.insecure:
            context.check_hostname = False
            context.verify_mode = ssl.CERT_NONE

        # The token auth part.
        headers: dict[str, str] = {}
        if info.scheme and info.token:
            headers['Authorization'] = f'{info.scheme} {info.token}'
        elif info.scheme:
            headers['Authorization'] = f'{info.scheme}'
        elif info.token:
            headers['Authorization'] = f'Bearer {info.token}'

        return aiohttp.ClientSession(
            connector=aiohttp.TCPConnector(
                limit=0,
                ssl=context,
            ),
            headers=headers,
        )

    async def close(self) -> None:
        if self.owned:
            await self.session.close()


def decode_to_pem(data: str | bytes) -> str:
    match data:
        case str() if data.startswith('-----BEGIN '):
            return data
        case bytes() if data.startswith(b'-----BEGIN '):
            return data.decode('ascii')
        case _:
            return base64.b64decode(data).decode('ascii')
