# code_block.py
#
# Renders the tutorial markdown: code regions of the tagger sources are
# marked with comments, and the markdown refers to them by name, so the
# tutorial never needs hardcoded line numbers.
#
# Usage: python -m pos_tutorial.code_block [markdown dir] [source dir ...]
#
# The output directory is the markdown directory with "_out" appended.
#
# 1. Find comments in the source files, collect the markers and map each
#   marker name to its file and line range.
# 2. Copy the markdown files, filling every auto-doc block with the code of
#   the region it names.
#
# Requires:
#  - `comment_parser`
#
# Assumptions:
#  - Source files have the right extension so their MIME type can be guessed.
#  - Comment tags are simple ascii names and cannot be nested.

import os
import shutil
import sys
import re
import logging
import mimetypes
from typing import Dict, Iterator, List, Tuple

from comment_parser import parsers
from comment_parser import comment_parser as cp
from comment_parser.comment_parser import UnsupportedError


COMMENT_MARKER_BEGIN = "SOURCE_MARKER_BEGIN"
COMMENT_MARKER_END = "SOURCE_MARKER_END"
AUTODOC_BEGIN_PATTERN = re.compile(
    r"<!-- MARKDOWN-AUTO-DOCS:START \(CODE:src=(.*?)&label=(\w+)\) -->"
)
AUTODOC_END = "<!-- MARKDOWN-AUTO-DOCS:END -->"

LineRange = Tuple[int, int]
MarkerMap = Dict[str, Dict[str, LineRange]]

# Setting up MIME type.
cp.MIME_MAP.update({"application/x-sh": parsers.shell_parser})


def list_files(some_path: str) -> Iterator[str]:
    if os.path.isfile(some_path):
        yield some_path
        return
    for dirpath, _, fnames in os.walk(some_path):
        for f in sorted(fnames):
            yield os.path.join(dirpath, f)


def _block_range(
    text_file: str, begin_lineno: int, end_lineno: int, strip_empty: bool
) -> LineRange:
    """1-based inclusive range of the lines strictly between two markers."""
    first, last = begin_lineno + 1, end_lineno - 1

    if strip_empty:
        with open(text_file, encoding="utf-8") as f:
            lines = f.readlines()
        while first <= last and not lines[first - 1].strip():
            first += 1
        while last >= first and not lines[last - 1].strip():
            last -= 1

    return first, last


def scan_sources(source_dirs: List[str], strip_empty_line: bool) -> MarkerMap:
    """
        Find the marked code regions of every text file under the given paths.

        .. code-block:: python
            import sys

            # SOURCE_MARKER_BEGIN_some_name
            print("Testing 1")
            print("Testing 2")
            # SOURCE_MARKER_END_some_name

        The mapping would look like:

        .. code-block:: python
            {"/abs/path/to/source": {"some_name": (4, 5)}}

    Args:
        source_dirs (List[str]): Files or directories to scan.
        strip_empty_line (bool): strip the empty lines at the start and end of the block.

    Returns:
        The mapping from absolute file path to marker names to line ranges.
    """
    marker_mapping: MarkerMap = {}

    for src_dir in source_dirs:
        for fn in list_files(src_dir):
            mime_type, _ = mimetypes.guess_type(fn)

            if mime_type is None:
                # Just try to use regular shell style comment
                mime_type = "text/x-shellscript"

            try:
                comments = cp.extract_comments(fn, mime_type)
            except UnicodeDecodeError:
                logging.info("Ignoring non-text file %s", fn)
                continue
            except UnsupportedError:
                logging.info("Ignoring Unsupported file %s of type %s", fn, mime_type)
                continue

            block_name, begin_lineno = None, -1
            for comment in comments:
                ctext = comment.text().strip()

                if ctext.startswith(COMMENT_MARKER_BEGIN):
                    if block_name is not None:
                        raise RuntimeError(
                            f"Nested marker [{ctext}] at {fn}:{comment.line_number()}, "
                            f"block [{block_name}] is still open."
                        )
                    block_name = re.sub("^" + COMMENT_MARKER_BEGIN + "_", "", ctext)
                    begin_lineno = comment.line_number()

                elif ctext.startswith(COMMENT_MARKER_END):
                    block_name_end = re.sub("^" + COMMENT_MARKER_END + "_", "", ctext)
                    if block_name_end != block_name:
                        raise RuntimeError(
                            "Unbalanced comment markers, scanning %s, "
                            "found marker name [%s] at line %d, and [%s] at line %d."
                            % (fn, block_name, begin_lineno, block_name_end, comment.line_number())
                        )

                    first, last = _block_range(
                        fn, begin_lineno, comment.line_number(), strip_empty_line
                    )
                    if last < first:
                        raise RuntimeError(f"Empty code block [{block_name}] in {fn}.")

                    marker_mapping.setdefault(os.path.abspath(fn), {})[block_name] = (
                        first,
                        last,
                    )
                    block_name = None

            if block_name is not None:
                raise RuntimeError(f"Marker [{block_name}] in {fn} is never closed.")
            logging.info("Parsing file %s of type %s", fn, mime_type)

    return marker_mapping


def code_lines(src_path: str, line_range: LineRange) -> List[str]:
    first, last = line_range
    with open(src_path, encoding="utf-8") as f:
        return f.readlines()[first - 1 : last]


def render_markdown(markdown_path: str, copy_path: str, marker_dict: MarkerMap) -> bool:
    """Given a markdown file, write a copy with every auto-doc block filled in.

    A block looks like::

        <!-- MARKDOWN-AUTO-DOCS:START (CODE:src=../pos_tutorial/tagger.py&label=class) -->
        <!-- MARKDOWN-AUTO-DOCS:END -->

    and anything already between the two markers is replaced.

    Args:
        markdown_path (str): The path to the input markdown file.
        copy_path (str): The path to write the rendered markdown to.
        marker_dict (MarkerMap): Marker locations from `scan_sources`.

    Returns:
        A boolean value representing whether something is replaced.
    """
    is_replaced = False
    in_block = False

    with open(markdown_path, encoding="utf-8") as f:
        lines = f.readlines()

    with open(copy_path, "w", encoding="utf-8") as out:
        for lineno, line in enumerate(lines, start=1):
            if in_block:
                if line.strip() == AUTODOC_END:
                    in_block = False
                    out.write(line)
                continue

            matched = AUTODOC_BEGIN_PATTERN.match(line.strip())
            if not matched:
                out.write(line)
                continue

            src_path_in_markdown, marker_label = matched.groups()
            full_src_path = os.path.abspath(
                os.path.join(os.path.dirname(markdown_path), src_path_in_markdown)
            )
            if marker_label not in marker_dict.get(full_src_path, {}):
                raise RuntimeError(
                    f"Tag [{marker_label}] referenced at {markdown_path}:{lineno} "
                    f"cannot be found in the source file {full_src_path}."
                )

            out.write(line)
            out.write("```python\n")
            out.writelines(code_lines(full_src_path, marker_dict[full_src_path][marker_label]))
            out.write("```\n")
            in_block = True
            is_replaced = True

    if in_block:
        raise RuntimeError(f"Unclosed auto-doc block in {markdown_path}.")

    return is_replaced


def render_all_markdowns(
    markdown_dir: str, target_dir: str, marker_dict: MarkerMap
) -> Tuple[List[str], List[str], List[str]]:
    """Render the markdown files of a directory into `target_dir`, keeping the
    directory structure.

    Returns:
        Three list of items:
          - The first one contains markdown files that are auto-replaced.
          - The second one contains other markdown files that are copied.
          - The third one contains other files (non-markdown) that are copied.
    """
    summary: Tuple[List[str], List[str], List[str]] = ([], [], [])
    for dirpath, _, fnames in os.walk(markdown_dir):
        structure = os.path.join(target_dir, os.path.relpath(dirpath, markdown_dir))
        os.makedirs(structure, exist_ok=True)

        for fname in fnames:
            src_file = os.path.join(dirpath, fname)
            target_file = os.path.normpath(os.path.join(structure, fname))

            if fname.endswith(".md"):
                if render_markdown(src_file, target_file, marker_dict):
                    summary[0].append(target_file)
                else:
                    summary[1].append(target_file)
            else:
                shutil.copyfile(src_file, target_file)
                summary[2].append(target_file)
    return summary


if __name__ == "__main__":
    logging.basicConfig(stream=sys.stdout, level=logging.INFO)

    markdown_root = os.path.normpath(sys.argv[1])
    mark_mapping = scan_sources(sys.argv[2:], strip_empty_line=True)
    summaries = render_all_markdowns(markdown_root, markdown_root + "_out", mark_mapping)

    logging.info("%d markdown files rendered.", len(summaries[0]))
    logging.info("%d markdown files copied.", len(summaries[1]))
    logging.info("%d other files copied.", len(summaries[2]))
