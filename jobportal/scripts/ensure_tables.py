"""
Bring a portal deployment up to date: create missing tables (users, jobs, applications)
and, with --uploads, the resume and profile-photo directories served under /uploads.
Existing rows and files are never touched.

  python -m jobportal.scripts.ensure_tables [--uploads]
"""
import argparse

from jobportal.database import ensure_tables_exist
from jobportal.services.file_storage import ensure_upload_dirs


def main(argv=None):
    parser = argparse.ArgumentParser(description="Create missing job portal tables and upload directories.")
    parser.add_argument(
        "--uploads",
        action="store_true",
        help="Also create the resume and profile-photo upload directories",
    )
    args = parser.parse_args(argv)

    created = ensure_tables_exist() or []
    if created:
        print(f"Created tables: {', '.join(created)}")
    else:
        print("All tables already exist.")

    if args.uploads:
        for d in ensure_upload_dirs():
            print(f"Upload directory ready: {d}")


if __name__ == "__main__":
    main()
