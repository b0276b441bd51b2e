from __future__ import annotations

from .report import build_tensor_report, save_tensor_report, stamp_report_payload

__all__ = ["build_tensor_report", "save_tensor_report", "stamp_report_payload"]
