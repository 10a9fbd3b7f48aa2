"""
MS Graph client setup.

Scripts share one lazily created client. Each calendar read on a worker
thread builds its own, since every read runs in a fresh event loop.
"""

from azure.identity import ClientSecretCredential
from msgraph import GraphServiceClient

from core.config import GRAPH_APP_ID, GRAPH_CLIENT_SECRET, GRAPH_TENANT_ID

_graph_client: GraphServiceClient | None = None


def create_graph_client() -> GraphServiceClient:
    """Build a new MS Graph client from the app-only credentials."""
    if not (GRAPH_TENANT_ID and GRAPH_APP_ID and GRAPH_CLIENT_SECRET):
        raise RuntimeError("MS Graph credentials are not configured")

    credential = ClientSecretCredential(
        tenant_id=GRAPH_TENANT_ID,
        client_id=GRAPH_APP_ID,
        client_secret=GRAPH_CLIENT_SECRET,
    )
    return GraphServiceClient(credentials=credential)


def get_graph_client() -> GraphServiceClient:
    """Get or create the shared MS Graph client (lazy initialization)."""
    global _graph_client
    if _graph_client is None:
        _graph_client = create_graph_client()
    return _graph_client
