from __future__ import annotations
import argparse, io, json, logging, sys, zipfile
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path

from tqdm import tqdm
from tqdm.contrib.logging import logging_redirect_tqdm

from .core.errors import JarHasherError
from .core.io import ProjectFilesystem
from .fallback import content_hashes_with_fallback
from .flags import log_level, tqdm_override
from .jar_content_hasher import ContentHashes, DefaultJarContentHasher
from .system import optimal_threads


def _log(msg: str) -> None:
    """Write a line without tearing the progress bar."""
    tqdm.write(msg, file=sys.stderr)


def _tqdm_file():
    # sys.stderr may be None when embedded; fall back to a sink
    f = getattr(sys, "stderr", None)
    return f if (f is not None and hasattr(f, "write")) else io.StringIO()


def _tqdm_disable() -> bool:
    forced = tqdm_override()
    if forced is not None:
        return forced
    f = getattr(sys, "stderr", None)
    return not (f is not None and hasattr(f, "isatty") and f.isatty())


def _hash_one(fs: ProjectFilesystem, rel: str, fallback: bool) -> ContentHashes:
    hasher = DefaultJarContentHasher(fs, rel)
    if fallback:
        return content_hashes_with_fallback(hasher, fs)
    return hasher.get_content_hashes()


def collect_hashes(root: Path, jars: list[str], workers: int, fallback: bool = False
                   ) -> tuple[dict[str, ContentHashes], dict[str, str]]:
    """Hash each archive on a worker thread. Returns (results, errors), both keyed by archive path."""
    fs = ProjectFilesystem(root)
    results: dict[str, ContentHashes] = {}
    errors: dict[str, str] = {}

    with tqdm(total=len(jars), desc="Reading manifests", unit="jar", file=_tqdm_file(), disable=_tqdm_disable()) as bar:
        present = []
        for rel in jars:
            if fs.exists(rel):
                present.append(rel)
                continue
            errors[rel] = f"no such archive under {root}"
            _log(f"{rel}: {errors[rel]}")
            bar.update(1)

        with ThreadPoolExecutor(max_workers=workers) as ex:
            futs = {ex.submit(_hash_one, fs, rel, fallback): rel for rel in present}
            for fut in as_completed(futs):
                rel = futs[fut]
                try:
                    results[rel] = fut.result()
                except (OSError, zipfile.BadZipFile, JarHasherError) as e:
                    errors[rel] = str(e)
                    _log(f"{rel}: {type(e).__name__}: {e}")
                bar.update(1)
    return results, errors


def _print_text(jars: list[str], results: dict[str, ContentHashes], out) -> None:
    many = len(jars) > 1
    for rel in jars:
        if rel not in results:
            continue
        if many:
            print(f"# {rel}", file=out)
        for name, h in results[rel].items():
            print(f"{name}\t{h.hash_code}", file=out)


def _print_json(jars: list[str], results: dict[str, ContentHashes], errors: dict[str, str], out) -> None:
    data = {}
    for rel in jars:
        if rel in results:
            data[rel] = {n: {"hash": str(h.hash_code), "type": h.file_type.value} for n, h in results[rel].items()}
        else:
            data[rel] = {"error": errors.get(rel, "")}
    print(json.dumps(data, indent=2), file=out)


def _cmd_hashes(args: argparse.Namespace) -> int:
    root = Path(args.root)
    jars: list[str] = []
    for j in args.jars:
        p = Path(j)
        # accept absolute paths under the root for convenience
        if p.is_absolute():
            try:
                p = p.resolve().relative_to(root.resolve())
            except ValueError:
                raise SystemExit(f"{j} is not under --root {root}") from None
        jars.append(p.as_posix())

    threads = args.threads or optimal_threads()
    with logging_redirect_tqdm():
        results, errors = collect_hashes(root, jars, threads, fallback=args.fallback)

    if args.json:
        _print_json(jars, results, errors, sys.stdout)
    else:
        _print_text(jars, results, sys.stdout)
    if errors:
        _log(f"failed: {len(errors)} of {len(jars)} archive(s)")
        return 1
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="jar-hasher", description="Read per-member content hashes from jar manifests")
    p.add_argument("-v", "--verbose", action="count", default=0, help="More logging (-vv for debug)")
    sub = p.add_subparsers(dest="cmd", required=True)

    h = sub.add_parser("hashes", help="Print member hashes recorded in one or more jars")
    h.add_argument("jars", nargs="+", help="Archive paths, relative to --root")
    h.add_argument("--root", type=str, default=".", help="Project root the archive paths are relative to")
    h.add_argument("--threads", type=int, help="Worker threads")
    h.add_argument("--fallback", action="store_true", help="Hash member bytes when an archive has no manifest")
    h.add_argument("--json", action="store_true", help="Emit JSON keyed by archive")
    h.set_defaults(func=_cmd_hashes)
    return p


def _configure_logging(verbose: int) -> None:
    if verbose >= 2:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        level = log_level()
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def run_cli(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)
    return args.func(args)
