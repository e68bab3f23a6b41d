"""Tests for fastnorm.optim IR processor."""

import pytest
import numpy as np

pytest.importorskip("numba")

from fastnorm.optim import (
    IRProcessor, LoopHint, HintType, process_ir,
    optimized_jit, vectorize, get_modified_ir,
)


LOOP_IR = """define void @f(i64 %n) {
entry:
  %marker = load i32, i32* @__FASTNORM_LOOP_VECTORIZE_8__
  br label %loop.header
loop.header:
  %i = phi i64 [ 0, %entry ], [ %next, %loop.header ]
  %next = add i64 %i, 1
  %done = icmp sge i64 %next, %n
  br i1 %done, label %exit, label %loop.header
exit:
  ret void
}"""


class TestMarkerScanning:
    """Test marker scanning in IR."""

    def test_scan_vectorize_marker(self):
        ir = """
        @__FASTNORM_LOOP_VECTORIZE_8__ = weak global i32 0
        br i1 %cond, label %loop.body, label %loop.exit
        """

        hints = IRProcessor().scan_markers(ir)

        assert len(hints) == 1
        assert hints[0].hint_type == 'VECTORIZE'
        assert hints[0].value == 8

    def test_scan_valueless_marker(self):
        ir = '%m = load i32, i32* @__FASTNORM_LOOP_NO_UNROLL__'

        hints = IRProcessor().scan_markers(ir)

        assert len(hints) == 1
        assert hints[0].hint_type == 'NO_UNROLL'
        assert hints[0].value is None

    def test_scan_multiple_markers(self):
        ir = """
        @__FASTNORM_LOOP_VECTORIZE_8__ = weak global i32 0
        @__FASTNORM_LOOP_UNROLL_4__ = weak global i32 0
        @__FASTNORM_LOOP_INTERLEAVE_2__ = weak global i32 0
        """

        hints = IRProcessor().scan_markers(ir)

        assert [h.hint_type for h in hints] == ['VECTORIZE', 'UNROLL', 'INTERLEAVE']
        assert [h.value for h in hints] == [8, 4, 2]

    def test_scan_no_markers(self):
        ir = """
        define i32 @foo() {
          ret i32 0
        }
        """

        assert IRProcessor().scan_markers(ir) == []


class TestLoopHint:
    """Test metadata rendering."""

    def test_vectorize_metadata(self):
        md = LoopHint(HintType.VECTORIZE, 8, 0).to_metadata(100)

        assert '!100 = distinct !{!100, !101, !102}' in md
        assert '"llvm.loop.vectorize.width", i32 8' in md

    def test_full_unroll_metadata(self):
        md = LoopHint(HintType.UNROLL, 0, 0).to_metadata(5)

        assert 'llvm.loop.unroll.full' in md
        assert 'unroll.count' not in md

    def test_unknown_hint(self):
        assert LoopHint('BOGUS', 1, 0).to_metadata(1) == ''


class TestIRProcessing:
    """Test full IR processing."""

    def test_attaches_to_backedge(self):
        modified, hints = IRProcessor(metadata_start_id=500).process(LOOP_IR)

        assert len(hints) == 1
        backedge = [l for l in modified.split('\n') if 'label %exit, label %loop.header' in l][0]
        assert backedge.endswith(', !llvm.loop !500')
        assert '; fastnorm loop metadata' in modified
        assert '"llvm.loop.vectorize.width", i32 8' in modified

    def test_no_markers_unchanged(self):
        ir = 'define void @g() {\n  ret void\n}'

        modified, hints = IRProcessor().process(ir)

        assert modified == ir
        assert hints == []

    def test_marker_without_loop(self):
        """A marker with no branch after it is reported but not attached."""
        ir = '@__FASTNORM_LOOP_VECTORIZE_4__ = weak global i32 0'

        modified, hints = IRProcessor().process(ir)

        assert len(hints) == 1
        assert '!llvm.loop' not in modified

    def test_process_ir_function(self):
        assert '!llvm.loop' in process_ir(LOOP_IR)

    def test_dispatcher_records_modified_ir(self, small_arr):
        @optimized_jit
        def double(arr):
            vectorize(8)
            for i in range(len(arr)):
                arr[i] *= 2
            return arr

        _ = double(small_arr.copy())
        modified_ir = get_modified_ir(double)

        if modified_ir is not None:
            assert 'llvm.loop' in modified_ir
            assert double.inspect_llvm() == modified_ir
