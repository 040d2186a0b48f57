#!/usr/bin/env python3
"""
Generate the launch checklist for one project from the command line.

Runs the same pipeline as the background job, but synchronously, and
replaces the project's existing checklist.

Usage:
    python scripts/generate_checklist.py <project_id>
"""
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from uuid import UUID

from sqlmodel import Session

from cockpit.core.database import engine
from cockpit.launch.client import (
    build_github_client,
    build_http_client,
    build_llm_client,
    has_llm_credentials,
)
from cockpit.launch.errors import LaunchError
from cockpit.launch.persister import list_items
from cockpit.launch.pipeline import run_generation


def main(project_id: UUID):
    """Generate the checklist and print the stored items."""
    if not has_llm_credentials():
        print("Error: No OPENAI_API_KEY configured.")
        print("Set it in .env before generating checklists.")
        sys.exit(1)

    with (
        Session(engine) as session,
        build_llm_client() as llm,
        build_http_client() as http,
        build_github_client() as github,
    ):
        try:
            result = run_generation(session, project_id, llm, http, github)
        except LaunchError as e:
            print(f"Generation failed: {e}")
            sys.exit(1)

        print(f"Stored {result.count} checklist items:\n")
        for item in list_items(session, project_id):
            print(f"{item.order}. {item.title}")
            print(f"   {item.ai_help_hint}")


if __name__ == "__main__":
    if len(sys.argv) != 2:
        print(__doc__)
        sys.exit(2)
    try:
        project_id = UUID(sys.argv[1])
    except ValueError:
        print(f"Error: {sys.argv[1]!r} is not a valid project id.")
        sys.exit(2)
    main(project_id)
