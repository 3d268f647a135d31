"""
Main CLI for Chunk Splitter.

Commands: split (chunk a file to JSON lines), extract (print a global range)
"""

import json
import sys
import time
from pathlib import Path
from typing import List, Optional

import click

from chunk_splitter.audit.logger import AuditLogger, get_audit_logger
from chunk_splitter.config import ConfigError, load_config
from chunk_splitter.splitter import ChunkStrategy, SplitOptionsError, get_chunk, iterate_chunks


def read_segments(path: str, lines: bool) -> List[str]:
    """
    Read a UTF-8 file as segments.

    Args:
        path: File path
        lines: If True, each line (newline kept) is a segment

    Returns:
        Segments whose concatenation is the file content
    """
    content = Path(path).read_text(encoding='utf-8')
    if lines:
        return content.splitlines(keepends=True)
    return [content]


def _audit_logger(cfg, audit_log: Optional[str]) -> Optional[AuditLogger]:
    audit_cfg = dict(cfg.get_audit_config())
    if audit_log:
        audit_cfg['file'] = audit_log
    elif not audit_cfg.get('enabled'):
        return None
    return get_audit_logger(audit_cfg)


def _fail(error: Exception, audit: Optional[AuditLogger], command: str):
    click.echo(click.style(f"✗ {error}", fg="red"), err=True)
    if audit is not None:
        audit.log_error(type(error).__name__, str(error), {'command': command})
    sys.exit(1)


@click.group()
@click.version_option(package_name='chunk-splitter')
def cli():
    """Chunk Splitter - bounded, overlapping, offset-preserving text chunks."""
    pass


@cli.command()
@click.argument('path', type=click.Path(exists=True, dir_okay=False))
@click.option('--chunk-size', type=int, help='Maximum chunk length')
@click.option('--chunk-overlap', type=int,
              help='Overlap: characters (character strategy) or paragraphs (paragraph strategy)')
@click.option('--strategy', type=click.Choice([s.value for s in ChunkStrategy]),
              help='Chunking strategy')
@click.option('--tokenizer', help='Measure length in tiktoken tokens (e.g. cl100k_base)')
@click.option('--lines', is_flag=True, help='Treat every line as a segment')
@click.option('--config', type=click.Path(exists=True), help='Config file path')
@click.option('--audit-log', type=click.Path(), help='Write audit events to this file')
def split(path, chunk_size, chunk_overlap, strategy, tokenizer, lines, config, audit_log):
    """
    Split a text file into chunks, one JSON object per line.

    Example:
        chunk-splitter split notes.md --strategy paragraph --chunk-size 800
    """
    audit = None
    try:
        cfg = load_config(config)
        audit = _audit_logger(cfg, audit_log)
        options = cfg.to_split_options(
            chunk_size=chunk_size,
            chunk_overlap=chunk_overlap,
            chunk_strategy=strategy,
            tokenizer=tokenizer,
        )
        segments = read_segments(path, lines)

        started = time.time()
        num_chunks = 0
        for chunk in iterate_chunks(segments, options):
            click.echo(json.dumps(chunk.to_dict(), ensure_ascii=False))
            num_chunks += 1
        elapsed_ms = (time.time() - started) * 1000

        if audit is not None:
            audit.log_split(
                num_segments=len(segments),
                num_chunks=num_chunks,
                strategy=options.chunk_strategy.value,
                chunk_size=options.chunk_size,
                chunk_overlap=options.chunk_overlap,
                execution_time_ms=elapsed_ms,
                source_path=str(path),
            )

        click.echo(click.style(f"✓ {num_chunks} chunks from {len(segments)} segments",
                               fg="green"), err=True)

    except (ConfigError, SplitOptionsError, OSError, UnicodeDecodeError) as e:
        _fail(e, audit, 'split')
    finally:
        if audit is not None:
            audit.close()


@cli.command()
@click.argument('path', type=click.Path(exists=True, dir_okay=False))
@click.option('--start', type=int, default=0, help='Global start offset')
@click.option('--end', type=int, help='Global end offset (exclusive)')
@click.option('--lines', is_flag=True, help='Treat every line as a segment')
@click.option('--config', type=click.Path(exists=True), help='Config file path')
@click.option('--audit-log', type=click.Path(), help='Write audit events to this file')
def extract(path, start, end, lines, config, audit_log):
    """Print the text between two global offsets."""
    audit = None
    try:
        cfg = load_config(config)
        audit = _audit_logger(cfg, audit_log)
        pieces = get_chunk(read_segments(path, lines), start, end)

        if audit is not None:
            audit.log_range_extraction(start, end, len(pieces), source_path=str(path))

        click.echo(''.join(pieces), nl=False)

    except (ConfigError, OSError, UnicodeDecodeError) as e:
        _fail(e, audit, 'extract')
    finally:
        if audit is not None:
            audit.close()


if __name__ == '__main__':
    cli()
