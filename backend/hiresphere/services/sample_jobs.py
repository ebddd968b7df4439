"""Sample Jobs — one-time bootstrap postings for an empty board.

Invariants:
    - Used only when the job slot is absent at open(), never at runtime
    - Owners (user_1..user_3) are placeholder ids with no ledger account, so nobody
      can edit or delete the samples through the store
"""

from datetime import datetime

from hiresphere.core.domain_types import AccountId, JobId, JobType
from hiresphere.schemas.job import Job

_SAMPLES: tuple[dict, ...] = (
    {
        "title": "Frontend Developer",
        "company": "TechCorp",
        "location": "San Francisco, CA",
        "description": "We are looking for a skilled frontend developer to join our team.",
        "requirements": [
            "3+ years of React experience", "TypeScript knowledge", "CSS/Tailwind skills",
        ],
        "salary": "$90,000 - $120,000",
    },
    {
        "title": "UX Designer",
        "company": "DesignHub",
        "location": "Remote",
        "description": "Join our design team to create beautiful user experiences.",
        "requirements": [
            "Portfolio of design work", "Experience with Figma", "User research skills",
        ],
        "salary": "$85,000 - $110,000",
    },
    {
        "title": "Backend Engineer",
        "company": "DataSystems",
        "location": "New York, NY",
        "description": "Build robust backend systems for our growing platform.",
        "requirements": ["Node.js expertise", "Database design", "API development"],
        "salary": "$100,000 - $130,000",
    },
)


def build_sample_jobs(now: datetime) -> list[Job]:
    return [
        Job(
            **fields,
            id=JobId(f"job_{n}"),
            type=JobType.FULL_TIME,
            owner_id=AccountId(f"user_{n}"),
            created_at=now,
            is_active=True,
        )
        for n, fields in enumerate(_SAMPLES, start=1)
    ]
