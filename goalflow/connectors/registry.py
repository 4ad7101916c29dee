from goalflow.connectors.base import BaseConnector
from goalflow.schemas.enums import TaskType
from typing import Dict, Type, Union


class ConnectorRegistry:
    _registry: Dict[str, Type[BaseConnector]] = {}

    @classmethod
    def register(cls, connector_cls: Type[BaseConnector]):
        cls._registry[connector_cls.task_type.value] = connector_cls

    @classmethod
    def get_connector(cls, name: Union[TaskType, str]) -> BaseConnector:
        key = name.value if isinstance(name, TaskType) else name
        connector_cls = cls._registry.get(key)
        if not connector_cls:
            raise ValueError(f"Connector '{key}' not found")
        return connector_cls()


from goalflow.connectors.conn_finance import FinanceConnector
from goalflow.connectors.conn_job_scraper import JobScraperConnector
from goalflow.connectors.conn_linkedin_engage import LinkedInEngageConnector
from goalflow.connectors.conn_linkedin_outreach import LinkedInOutreachConnector
from goalflow.connectors.conn_linkedin_post import LinkedInPostConnector
from goalflow.connectors.conn_monitor import MonitorConnector
from goalflow.connectors.conn_news import NewsConnector
from goalflow.connectors.conn_research import ResearchConnector
from goalflow.connectors.conn_scraper import ScraperConnector
from goalflow.connectors.conn_video import VideoConnector
# Register built-ins
for _connector in (
    JobScraperConnector,
    NewsConnector,
    VideoConnector,
    FinanceConnector,
    LinkedInEngageConnector,
    LinkedInOutreachConnector,
    MonitorConnector,
    ScraperConnector,
    ResearchConnector,
    LinkedInPostConnector,
):
    ConnectorRegistry.register(_connector)
