from sqlalchemy import CheckConstraint, Column, ForeignKey, Integer, Numeric, String, Text
from jobly.core.database import Base


class Job(Base):
    """
    Job posting belonging to a company.

    ``equity`` is a fraction between 0 and 1; NULL means no equity offered.
    """
    __tablename__ = "jobs"
    __table_args__ = (
        CheckConstraint("salary >= 0", name="ck_jobs_salary"),
        CheckConstraint("equity <= 1.0", name="ck_jobs_equity"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(Text, nullable=False)
    salary = Column(Integer, nullable=True)
    equity = Column(Numeric, nullable=True)
    company_handle = Column(
        String(25),
        ForeignKey("companies.handle", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    def __repr__(self):
        return f"<Job(id={self.id}, title='{self.title}', company='{self.company_handle}')>"
