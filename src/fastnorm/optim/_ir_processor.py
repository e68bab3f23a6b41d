"""LLVM IR Post-Processor for Loop Optimization Hints.

Scans compiled LLVM IR for the markers inserted by the loop hint
intrinsics (see _loop_hints.py) and attaches the matching LLVM loop
metadata to the loop that follows each marker.

    User code with loop hints
           |
           v
    Numba compilation -> LLVM IR with __FASTNORM_LOOP_*__ markers
           |
           v
    IRProcessor.process()  <-- This module
           |
           v
    LLVM IR with !llvm.loop metadata
"""

import logging
import re
from dataclasses import dataclass
from typing import List, Optional, Tuple

from ._logging import get_logger


__all__ = [
    'IRProcessor',
    'LoopHint',
    'HintType',
    'process_ir',
]


logger = get_logger('optim.ir')


# =============================================================================
# Data Structures
# =============================================================================

class HintType:
    """Enumeration of supported hint types."""
    VECTORIZE = 'VECTORIZE'
    NO_VECTORIZE = 'NO_VECTORIZE'
    UNROLL = 'UNROLL'
    NO_UNROLL = 'NO_UNROLL'
    INTERLEAVE = 'INTERLEAVE'


@dataclass
class LoopHint:
    """A loop hint marker found in IR."""
    hint_type: str
    value: Optional[int]
    line_number: int  # line in IR where the marker was found

    def to_metadata(self, md_id: int) -> str:
        """Render the LLVM metadata nodes for this hint, rooted at ``!md_id``.

        Returns an empty string for unknown hint types.
        """
        if self.hint_type == HintType.VECTORIZE:
            return (
                f'!{md_id} = distinct !{{!{md_id}, !{md_id + 1}, !{md_id + 2}}}\n'
                f'!{md_id + 1} = !{{!"llvm.loop.vectorize.enable", i1 true}}\n'
                f'!{md_id + 2} = !{{!"llvm.loop.vectorize.width", i32 {self.value}}}'
            )

        if self.hint_type == HintType.NO_VECTORIZE:
            return (
                f'!{md_id} = distinct !{{!{md_id}, !{md_id + 1}}}\n'
                f'!{md_id + 1} = !{{!"llvm.loop.vectorize.enable", i1 false}}'
            )

        if self.hint_type == HintType.UNROLL:
            if self.value == 0:
                return (
                    f'!{md_id} = distinct !{{!{md_id}, !{md_id + 1}}}\n'
                    f'!{md_id + 1} = !{{!"llvm.loop.unroll.full"}}'
                )
            return (
                f'!{md_id} = distinct !{{!{md_id}, !{md_id + 1}, !{md_id + 2}}}\n'
                f'!{md_id + 1} = !{{!"llvm.loop.unroll.enable", i1 true}}\n'
                f'!{md_id + 2} = !{{!"llvm.loop.unroll.count", i32 {self.value}}}'
            )

        if self.hint_type == HintType.NO_UNROLL:
            return (
                f'!{md_id} = distinct !{{!{md_id}, !{md_id + 1}}}\n'
                f'!{md_id + 1} = !{{!"llvm.loop.unroll.disable"}}'
            )

        if self.hint_type == HintType.INTERLEAVE:
            return (
                f'!{md_id} = distinct !{{!{md_id}, !{md_id + 1}}}\n'
                f'!{md_id + 1} = !{{!"llvm.loop.interleave.count", i32 {self.value}}}'
            )

        return ''


# =============================================================================
# IR Processor
# =============================================================================

class IRProcessor:
    """Adds loop metadata to LLVM IR based on hint markers.

    Example:
        processor = IRProcessor()
        modified_ir, hints = processor.process(original_ir)

        # Or just look at what is there:
        hints = processor.scan_markers(original_ir)
    """

    MARKER_PATTERN = re.compile(r'__FASTNORM_LOOP_(\w+?)(?:_(\d+))?__')
    LABEL_PATTERN = re.compile(r'^([\w.]+):')
    COND_BRANCH_PATTERN = re.compile(
        r'br\s+i1\s+%[\w.]+,\s+label\s+%([\w.]+),\s+label\s+%([\w.]+)'
    )

    # How far past a marker to look for its loop
    SEARCH_WINDOW = 100

    def __init__(self, verbose: bool = False, metadata_start_id: int = 10000):
        """
        Args:
            verbose: Log progress at INFO instead of DEBUG
            metadata_start_id: First ID used for generated metadata nodes
        """
        self.verbose = verbose
        self.metadata_start_id = metadata_start_id
        self._current_md_id = metadata_start_id

    def _log(self, msg, *args):
        logger.log(logging.INFO if self.verbose else logging.DEBUG, msg, *args)

    def process(self, ir: str) -> Tuple[str, List[LoopHint]]:
        """Scan ``ir`` for markers and attach loop metadata.

        Returns:
            Tuple of (modified_ir, hints found)
        """
        self._current_md_id = self.metadata_start_id

        hints = self.scan_markers(ir)
        if not hints:
            self._log('No loop hints found in IR')
            return ir, []

        self._log('Found %d loop hints', len(hints))
        for hint in hints:
            self._log('  %s(%s) at line %d', hint.hint_type, hint.value, hint.line_number)

        lines = ir.split('\n')
        associations = []
        for hint in hints:
            branch_line = self._find_next_loop_branch(lines, hint.line_number)
            if branch_line is None:
                logger.warning(
                    'No loop found after %s hint at IR line %d',
                    hint.hint_type, hint.line_number,
                )
                continue
            associations.append((hint, branch_line))

        return self._insert_metadata(lines, associations), hints

    def scan_markers(self, ir: str) -> List[LoopHint]:
        """Return every loop hint marker in ``ir``, in IR order."""
        hints = []
        for line_num, line in enumerate(ir.split('\n')):
            match = self.MARKER_PATTERN.search(line)
            if match:
                value_str = match.group(2)
                hints.append(LoopHint(
                    hint_type=match.group(1),
                    value=int(value_str) if value_str else None,
                    line_number=line_num,
                ))
        return hints

    def _find_next_loop_branch(self, lines: List[str], start_line: int) -> Optional[int]:
        """Line of the first backedge branch after ``start_line``.

        A backedge is a conditional branch targeting a label defined between
        the marker and the branch. Falls back to the next conditional branch.
        """
        end = min(start_line + self.SEARCH_WINDOW, len(lines))
        seen_labels = set()
        first_cond_branch = None

        for i in range(start_line + 1, end):
            line = lines[i]

            label_match = self.LABEL_PATTERN.match(line)
            if label_match:
                seen_labels.add(label_match.group(1))
                continue

            branch_match = self.COND_BRANCH_PATTERN.search(line)
            if branch_match:
                if first_cond_branch is None:
                    first_cond_branch = i
                if branch_match.group(1) in seen_labels or branch_match.group(2) in seen_labels:
                    return i

        return first_cond_branch

    def _insert_metadata(
        self,
        lines: List[str],
        associations: List[Tuple[LoopHint, int]],
    ) -> str:
        """Tag branch lines with !llvm.loop and append the metadata nodes."""
        metadata_blocks = []

        for hint, branch_line in associations:
            md_id = self._next_md_id()
            metadata = hint.to_metadata(md_id)
            if not metadata:
                continue

            line = lines[branch_line]
            if '!llvm.loop' in line:
                continue

            lines[branch_line] = f'{line.rstrip()}, !llvm.loop !{md_id}'
            metadata_blocks.append(metadata)

        modified_ir = '\n'.join(lines)
        if metadata_blocks:
            modified_ir += '\n\n; fastnorm loop metadata\n'
            modified_ir += '\n'.join(metadata_blocks)

        self._log('Attached %d loop metadata blocks', len(metadata_blocks))
        return modified_ir

    def _next_md_id(self) -> int:
        md_id = self._current_md_id
        self._current_md_id += 10  # room for sub-nodes
        return md_id


def process_ir(ir: str, verbose: bool = False) -> str:
    """Process LLVM IR and return it with loop metadata attached.

    Example:
        original_ir = func.inspect_llvm(sig)
        annotated_ir = process_ir(original_ir)
    """
    modified_ir, _ = IRProcessor(verbose=verbose).process(ir)
    return modified_ir
