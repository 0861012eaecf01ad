from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..models.job import Job


class JobRepository:
    def __init__(self, db: Session):
        self.db = db

    def find_job_by_slug_and_owner(self, slug: str, owner_id: int) -> Job | None:
        return (
            self.db.query(Job)
            .filter(Job.slug == slug, Job.created_by == int(owner_id))
            .first()
        )

    def find_by_slug(self, slug: str) -> Job | None:
        return self.db.query(Job).filter(Job.slug == slug).first()

    def find_active_by_slug(self, slug: str) -> Job | None:
        return self.db.query(Job).filter(Job.slug == slug, Job.status == "active").first()

    def get(self, job_id: int) -> Job | None:
        return self.db.query(Job).filter(Job.id == int(job_id)).first()

    def titles_for(self, job_ids) -> dict[int, str]:
        ids = {int(i) for i in job_ids}
        if not ids:
            return {}
        return dict(self.db.query(Job.id, Job.title).filter(Job.id.in_(ids)).all())

    def slug_exists(self, slug: str) -> bool:
        return self.db.query(Job.id).filter(Job.slug == slug).first() is not None

    def list_jobs(
        self,
        *,
        owner_id: int | None = None,
        public_only: bool = True,
        status: str | None = None,
        skip: int = 0,
        limit: int = 10,
    ) -> tuple[list[Job], int]:
        q = self.db.query(Job)
        if owner_id is not None:
            q = q.filter(Job.created_by == int(owner_id))
        elif public_only:
            q = q.filter(Job.is_public.is_(True))
        if status:
            q = q.filter(Job.status == status)

        total = q.count()
        if skip >= total:
            return [], total
        rows = q.order_by(Job.created_at.desc(), Job.id.desc()).offset(skip).limit(limit).all()
        return rows, total

    def add(self, job: Job) -> Job:
        try:
            self.db.add(job)
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
        self.db.refresh(job)
        return job
