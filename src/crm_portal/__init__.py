from crm_portal.config import MissingConfigError, PortalConfig, load_portal_config
from crm_portal.hubspot import HubSpotClient, HubSpotError
from crm_portal.records import DEFAULT_PROPERTIES, CrmRecord, RecordSubmission

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_PROPERTIES",
    "CrmRecord",
    "HubSpotClient",
    "HubSpotError",
    "MissingConfigError",
    "PortalConfig",
    "RecordSubmission",
    "__version__",
    "load_portal_config",
]
