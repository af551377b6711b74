import logging
from typing import List
from brand_analyzer.db.repo import WebsiteRepository
from brand_analyzer.exceptions import InternalError, NotFoundError
from brand_analyzer.models.schemas import WebsiteRecord

logger = logging.getLogger(__name__)


class RecordService:
    def __init__(self, repository: WebsiteRepository):
        self.repository = repository

    def list_records(self) -> List[WebsiteRecord]:
        try:
            return self.repository.list_all()
        except Exception as e:
            logger.exception("Error retrieving website records")
            raise InternalError("Failed to retrieve website records.", detail=str(e)) from e

    def update_record(self, record_id: int, brand_name: str | None, description: str | None) -> WebsiteRecord:
        try:
            return self.repository.update(record_id, brand_name, description)
        except NotFoundError:
            raise
        except Exception as e:
            logger.exception("Error updating website record %s", record_id)
            raise InternalError("Failed to update website record.", detail=str(e)) from e

    def delete_record(self, record_id: int) -> WebsiteRecord:
        try:
            return self.repository.delete(record_id)
        except NotFoundError:
            raise
        except Exception as e:
            logger.exception("Error deleting website record %s", record_id)
            raise InternalError("Failed to delete website record.", detail=str(e)) from e
