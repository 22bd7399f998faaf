"""Async client for the PokéAPI REST service.

Every request is made once. Transport errors, timeouts, HTTP error statuses and
undecodable bodies are all raised as RemoteFailureError so callers only have one
failure to handle.
"""

import logging
from typing import Any
from urllib.parse import quote

import httpx

from pokedex.catalog.errors import RemoteFailureError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://pokeapi.co/api/v2"


class PokeApiClient:
    """Fetch Pokémon lists, details, species and evolution chains."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 10.0,
        max_connections: int = 10,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: API root, without trailing slash
            timeout: Per-request timeout in seconds
            max_connections: Connection pool size
            transport: Optional httpx transport, used by tests
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.max_connections = max_connections
        self._transport = transport
        self.client: httpx.AsyncClient | None = None
        self.stats = {"requests": 0, "failures": 0}

    async def start(self) -> None:
        """Open the underlying HTTP client."""
        if self.client is not None:
            return

        self.client = httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout),
            limits=httpx.Limits(
                max_keepalive_connections=self.max_connections,
                max_connections=self.max_connections,
            ),
            transport=self._transport,
            follow_redirects=True,
        )
        logger.debug("PokéAPI client started for %s", self.base_url)

    async def stop(self) -> None:
        """Close the underlying HTTP client."""
        if self.client:
            await self.client.aclose()
            self.client = None
            logger.debug("PokéAPI client stopped")

    async def __aenter__(self) -> "PokeApiClient":
        await self.start()
        return self

    async def __aexit__(self, exc_type: object, exc_val: object, exc_tb: object) -> None:
        await self.stop()

    async def get_json(self, url: str, params: dict[str, Any] | None = None) -> Any:  # noqa: ANN401
        """GET a URL and decode its JSON body.

        Args:
            url: Absolute URL to fetch
            params: Optional query parameters

        Returns:
            Decoded JSON body

        Raises:
            RemoteFailureError: On any transport, HTTP or decoding failure
        """
        if self.client is None:
            await self.start()
        assert self.client is not None

        self.stats["requests"] += 1
        try:
            response = await self.client.get(url, params=params)
            response.raise_for_status()
            return response.json()
        except httpx.TimeoutException as e:
            self.stats["failures"] += 1
            logger.error("Request to %s timed out after %ss", url, self.timeout)
            raise RemoteFailureError(f"Request timed out: {url}", url=url) from e
        except httpx.HTTPStatusError as e:
            self.stats["failures"] += 1
            logger.error("Request to %s failed (HTTP %d)", url, e.response.status_code)
            raise RemoteFailureError(
                f"HTTP {e.response.status_code} from {url}", url=url
            ) from e
        except httpx.RequestError as e:
            self.stats["failures"] += 1
            logger.error("Request to %s failed: %s", url, e)
            raise RemoteFailureError(f"Request failed: {url}", url=url) from e
        except ValueError as e:
            self.stats["failures"] += 1
            logger.error("Invalid JSON from %s: %s", url, e)
            raise RemoteFailureError(f"Invalid JSON from {url}", url=url) from e

    async def fetch_list(self, limit: int) -> list[dict[str, Any]]:
        """Fetch the first `limit` entries of the Pokémon list."""
        url = f"{self.base_url}/pokemon/"
        data = await self.get_json(url, params={"limit": limit})
        results = data.get("results") if isinstance(data, dict) else None
        if not isinstance(results, list):
            raise RemoteFailureError(f"List response from {url} has no results", url=url)
        return results

    async def fetch_details(self, url: str) -> dict[str, Any]:
        """Fetch a Pokémon detail document from its own URL."""
        data = await self.get_json(url)
        if not isinstance(data, dict):
            raise RemoteFailureError(f"Detail response from {url} is not an object", url=url)
        return data

    def pokemon_url(self, name: str) -> str:
        """URL of the single-Pokémon endpoint for a name."""
        return f"{self.base_url}/pokemon/{quote(name.lower())}"

    async def fetch_pokemon(self, name: str) -> dict[str, Any]:
        """Fetch a Pokémon detail document by name."""
        return await self.fetch_details(self.pokemon_url(name))

    async def fetch_species(self, name: str) -> dict[str, Any]:
        """Fetch the species document for a Pokémon name."""
        url = f"{self.base_url}/pokemon-species/{quote(name.lower())}"
        data = await self.get_json(url)
        if not isinstance(data, dict):
            raise RemoteFailureError(f"Species response from {url} is not an object", url=url)
        return data

    async def fetch_evolution_chain(self, name: str) -> Any:  # noqa: ANN401
        """Fetch the evolution chain document of a Pokémon's species.

        The chain URL is only known from the species document, so this makes
        two requests in sequence.
        """
        species = await self.fetch_species(name)
        chain_ref = species.get("evolution_chain")
        chain_url = chain_ref.get("url") if isinstance(chain_ref, dict) else None
        if not chain_url:
            raise RemoteFailureError(f"Species '{name}' has no evolution chain URL")
        return await self.get_json(chain_url)
