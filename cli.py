# cli.py
import argparse
import asyncio
import json
import logging
from pathlib import Path

from resume_builder.client.api_client import ResumeApiClient
from resume_builder.client.draft_store import DraftStore, FileStorage, STORAGE_KEY
from resume_builder.client.session import ResumeEditingSession
from resume_builder.config import settings
from resume_builder.exceptions import ResumeBuilderError
from resume_builder.schemas.draft import ResumeDraft
from resume_builder.services.export import pdf_exporter
from resume_builder.services.text_projection import resume_to_text
from resume_builder.services.validation import validate_draft
from resume_builder.utils.file_handler import write_file_atomic
from resume_builder.utils.logging import configure_logging


def draft_file(value: str) -> Path:
    """argparse type for --draft: the draft store keeps one ``<key>.json`` file per draft."""
    path = Path(value)
    if path.suffix != ".json":
        raise argparse.ArgumentTypeError(f"draft file must end in .json: {value}")
    return path


def load_store(draft_path=None):
    """A draft file given on the command line, or the default local draft."""
    if draft_path:
        path = Path(draft_path)
        return DraftStore(FileStorage(path.parent), key=path.stem)
    return DraftStore(FileStorage(settings.DRAFT_STORAGE_DIR), key=STORAGE_KEY)


async def run(args) -> None:
    store = load_store(args.draft)
    draft: ResumeDraft = store.load()

    if args.mode == "text":
        print(resume_to_text(draft))
    elif args.mode == "validate":
        errors = validate_draft(draft)
        print(json.dumps(errors, indent=2) if errors else "Draft is complete.")
    elif args.mode == "export":
        out_dir = args.out or settings.EXPORT_DIR
        if args.server_render:
            async with ResumeApiClient(args.api, timeout=settings.API_TIMEOUT) as client:
                pdf = await ResumeEditingSession(store, client).render_pdf_remote()
            path = await write_file_atomic(Path(out_dir) / pdf_exporter.resume_file_name(draft), pdf)
        else:
            path = await pdf_exporter.export_resume(draft, out_dir)
        print("OK", path)
    else:
        async with ResumeApiClient(args.api, timeout=settings.API_TIMEOUT) as client:
            session = ResumeEditingSession(store, client, resume_id=args.resume_id)
            if args.pull and args.resume_id is not None:
                await session.hydrate_from_remote(args.resume_id)
                draft = session.draft
            if args.mode == "push":
                record = await session.save_remote()
                print("Saved resume", record["id"])
            elif args.mode == "optimize":
                result = await session.optimize(args.role)
                print(f"ATS score: {result.ats_score}/100 (saved as resume {session.resume_id})")
            elif args.mode == "cover-letter":
                if not args.role:
                    raise SystemExit("Provide --role for cover letter generation")
                letter = await session.generate_cover_letter(args.role, args.company, args.recipient)
                if args.out:
                    path = await pdf_exporter.export_cover_letter(letter, draft, args.out)
                    print("OK", path)
                else:
                    print(letter)


def main(argv=None):
    parser = argparse.ArgumentParser()
    parser.add_argument("--mode", choices=["text", "validate", "export", "push", "optimize", "cover-letter"], required=True)
    parser.add_argument("--draft", type=draft_file, help="draft JSON file (defaults to the local draft store)")
    parser.add_argument("--out", help="output directory for PDF files")
    parser.add_argument("--role", help="target role (optimize, cover-letter)")
    parser.add_argument("--company", help="company name (cover-letter)")
    parser.add_argument("--recipient", help="recipient name (cover-letter)")
    parser.add_argument("--resume-id", type=int, help="existing remote resume id to update")
    parser.add_argument("--pull", action="store_true", help="load --resume-id from the server into the draft first")
    parser.add_argument("--server-render", action="store_true", help="export: render the PDF on the server")
    parser.add_argument("--api", default=settings.API_BASE_URL, help="resume API base URL")

    args = parser.parse_args(argv)
    configure_logging(settings.LOG_LEVEL)
    try:
        asyncio.run(run(args))
    except ResumeBuilderError as e:
        logging.getLogger("cli").error("%s", e.message)
        raise SystemExit(1)

if __name__ == "__main__":
    main()
