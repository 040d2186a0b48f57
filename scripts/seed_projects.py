#!/usr/bin/env python3
"""
Seed the database with sample projects.

Existing projects with the same names are left as they are, so the script
can be run more than once.

Usage:
    python scripts/seed_projects.py
"""
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlmodel import Session, select

from cockpit.core.database import create_db_and_tables, engine
from cockpit.models import Project, ProjectStatus

SAMPLE_PROJECTS = [
    {
        "name": "Vibe Cockpit Alpha",
        "status": ProjectStatus.DESIGN,
        "frontend_url": "https://alpha.vibe-cockpit.dev",
    },
    {
        "name": "Legacy Dashboard",
        "status": ProjectStatus.RETIRED,
        "frontend_url": "https://old.dashboard.com",
    },
]


def main():
    """Create the sample projects that do not exist yet."""
    print("Start seeding ...")
    create_db_and_tables()

    with Session(engine) as session:
        for fields in SAMPLE_PROJECTS:
            project = session.exec(select(Project).where(Project.name == fields["name"])).first()
            if project:
                print(f"Project already exists with id: {project.id}")
                continue

            project = Project(**fields)
            session.add(project)
            session.commit()
            session.refresh(project)
            print(f"Created project with id: {project.id}")

    print("Seeding finished.")


if __name__ == "__main__":
    main()
