from typing import List
from sqlalchemy import select
from brand_analyzer.db.session import Database
from brand_analyzer.exceptions import NotFoundError
from brand_analyzer.models.db_models import Website
from brand_analyzer.models.schemas import WebsiteRecord


class WebsiteRepository:
    def __init__(self, database: Database):
        self.database = database

    def create(self, brand_name: str, description: str) -> WebsiteRecord:
        with self.database.session() as s:
            row = Website(brand_name=brand_name, description=description)
            s.add(row)
            s.flush()
            # pull the server-generated timestamp
            s.refresh(row)
            return WebsiteRecord.model_validate(row)

    def list_all(self) -> List[WebsiteRecord]:
        with self.database.session() as s:
            stmt = select(Website).order_by(Website.timestamp.desc(), Website.id.desc())
            return [WebsiteRecord.model_validate(row) for row in s.scalars(stmt)]

    def update(self, record_id: int, brand_name: str | None, description: str | None) -> WebsiteRecord:
        with self.database.session() as s:
            row = s.get(Website, record_id)
            if row is None:
                raise NotFoundError(detail=f"no website with id {record_id}")
            row.brand_name = brand_name
            row.description = description
            s.flush()
            return WebsiteRecord.model_validate(row)

    def delete(self, record_id: int) -> WebsiteRecord:
        with self.database.session() as s:
            row = s.get(Website, record_id)
            if row is None:
                raise NotFoundError(detail=f"no website with id {record_id}")
            record = WebsiteRecord.model_validate(row)
            s.delete(row)
            return record
