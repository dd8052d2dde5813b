"""
MS Graph client setup with lazy initialization.
"""

from azure.identity import ClientSecretCredential
from msgraph import GraphServiceClient

from core import config

_graph_client: GraphServiceClient | None = None


def get_graph_client() -> GraphServiceClient:
    """
    Get or create the MS Graph client (lazy initialization).

    Raises:
        ConfigurationError: if the app registration credentials are not set
    """
    global _graph_client
    if _graph_client is None:
        config.check_graph_credentials()

        credential = ClientSecretCredential(
            tenant_id=config.GRAPH_TENANT_ID,
            client_id=config.GRAPH_APP_ID,
            client_secret=config.GRAPH_CLIENT_SECRET,
        )
        _graph_client = GraphServiceClient(credentials=credential)
    return _graph_client
