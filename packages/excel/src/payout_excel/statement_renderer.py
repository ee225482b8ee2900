"""Payout statement renderer: payees, investor queue and summary sheets."""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

import pandas as pd
from openpyxl import Workbook
from openpyxl.styles import Font, Border, Side, Alignment, PatternFill
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from payout_domain.blocks import (
    BlockContext,
    BlockExecutor,
    InvestorQueueBlock,
    LedgerSummaryBlock,
    PayoutStatementBlock,
)
from payout_domain.schemas import SplitterState, StatementCFG

log = logging.getLogger(__name__)

AMOUNT_FORMAT = "#,##0"
PERCENT_FORMAT = "0.00"

# Column headers per DataFrame column; columns not listed are rendered as-is
HEADERS: Dict[str, str] = {
    "identity": "Identity",
    "shares": "Shares",
    "share_pct": "Share %",
    "entitlement": "Entitlement",
    "released": "Released",
    "pending": "Pending",
    "position": "Slot",
    "status": "Status",
    "fee_owed": "Fee Owed",
    "reimbursed_total": "Reimbursed",
    "pool_balance": "Pool Balance",
    "total_received": "Total Received",
    "total_released": "Total Released",
    "total_pending": "Total Pending",
    "unallocated": "Unallocated",
    "fee_pool_total": "Investor Fees Owed",
    "payee_count": "Payees",
    "investor_count": "Active Investors",
}

AMOUNT_COLUMNS = {
    "shares", "entitlement", "released", "pending", "fee_owed", "reimbursed_total",
    "pool_balance", "total_received", "total_released", "total_pending",
    "unallocated", "fee_pool_total",
}

# Payee columns summed in the totals row (as formulas)
PAYEE_TOTAL_COLUMNS = ["shares", "entitlement", "released", "pending"]


class StatementRenderer:
    """Render a splitter's state into a statement workbook.

    Example:
        renderer = StatementRenderer(StatementCFG(title="Q3 Payouts"))
        renderer.render(splitter.state, "q3_payouts.xlsx")
    """

    def __init__(self, config: Optional[StatementCFG] = None):
        self.config = config or StatementCFG()

        self.title_font = Font(bold=True, size=14)
        self.bold_font = Font(bold=True)
        self.header_font = Font(bold=True, color="FFFFFF")  # White text on header fill
        self.header_fill = PatternFill(
            start_color=self.config.header_color,
            end_color=self.config.header_color,
            fill_type="solid",
        )
        self.cleared_font = Font(italic=True, color="808080")  # Grey for reimbursed investors

        self.thin_border = Border(
            left=Side(style='thin'),
            right=Side(style='thin'),
            top=Side(style='thin'),
            bottom=Side(style='thin')
        )
        self.top_border = Border(top=Side(style='medium'))
        self.center_align = Alignment(horizontal='center', vertical='center')

    def render(self, state: SplitterState, output_path: str) -> str:
        wb = self.build_workbook(state)
        wb.save(output_path)
        log.info("wrote payout statement to %s", output_path)
        return output_path

    def build_workbook(self, state: SplitterState) -> Workbook:
        context = self._run_blocks(state)

        wb = Workbook()
        wb.remove(wb.active)

        self._render_payees_sheet(wb, context.get("payout_statement"))
        if self.config.include_investors:
            self._render_investors_sheet(wb, context.get("investor_queue"))
        if self.config.include_summary:
            self._render_summary_sheet(wb, context.get("ledger_summary"))

        return wb

    def _run_blocks(self, state: SplitterState) -> BlockContext:
        blocks = [PayoutStatementBlock()]
        if self.config.include_investors:
            blocks.append(InvestorQueueBlock(include_cleared=self.config.include_cleared_investors))
        if self.config.include_summary:
            blocks.append(LedgerSummaryBlock())

        context = BlockContext()
        context.set("splitter_state", state)
        return BlockExecutor(blocks).execute(context)

    # ------------------------------------------------------------------ #
    # Sheets
    # ------------------------------------------------------------------ #

    def _render_payees_sheet(self, wb: Workbook, df: pd.DataFrame) -> None:
        ws = wb.create_sheet(self.config.payees_sheet_name)
        ws.cell(row=1, column=1, value=self.config.title).font = self.title_font

        header_row = 3
        last_row = self._write_table(ws, df, header_row)

        # Totals row with formulas so edits in the sheet stay consistent
        totals_row = last_row + 1
        label = ws.cell(row=totals_row, column=1, value="Total")
        label.font = self.bold_font
        label.border = self.top_border
        columns: List[str] = list(df.columns)
        for name in PAYEE_TOTAL_COLUMNS:
            col = columns.index(name) + 1
            letter = get_column_letter(col)
            if last_row > header_row:
                formula = f"=SUM({letter}{header_row + 1}:{letter}{last_row})"
            else:
                formula = 0
            cell = ws.cell(row=totals_row, column=col, value=formula)
            cell.font = self.bold_font
            cell.border = self.top_border
            cell.number_format = AMOUNT_FORMAT

        ws.freeze_panes = ws.cell(row=header_row + 1, column=1)

    def _render_investors_sheet(self, wb: Workbook, df: pd.DataFrame) -> None:
        ws = wb.create_sheet(self.config.investors_sheet_name)
        ws.cell(row=1, column=1, value="Investor Reimbursement Queue").font = self.title_font

        header_row = 3
        self._write_table(ws, df, header_row)

        status_col = list(df.columns).index("status") + 1
        for row in range(header_row + 1, header_row + 1 + len(df)):
            if ws.cell(row=row, column=status_col).value == "cleared":
                for col in range(1, len(df.columns) + 1):
                    ws.cell(row=row, column=col).font = self.cleared_font

    def _render_summary_sheet(self, wb: Workbook, df: pd.DataFrame) -> None:
        """Summary is a single-row frame; render it vertically as label/value pairs."""
        ws = wb.create_sheet(self.config.summary_sheet_name)
        ws.cell(row=1, column=1, value="Ledger Summary").font = self.title_font

        record = df.iloc[0].to_dict() if not df.empty else {}
        for offset, (name, value) in enumerate(record.items()):
            row = 3 + offset
            label = ws.cell(row=row, column=1, value=HEADERS.get(name, name))
            label.font = self.bold_font
            label.border = self.thin_border
            cell = ws.cell(row=row, column=2, value=_to_cell_value(value))
            cell.border = self.thin_border
            if name in AMOUNT_COLUMNS:
                cell.number_format = AMOUNT_FORMAT

        ws.column_dimensions["A"].width = 22
        ws.column_dimensions["B"].width = 16

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #

    def _write_table(self, ws: Worksheet, df: pd.DataFrame, header_row: int) -> int:
        """Write a DataFrame as a styled table. Returns the last data row."""
        columns: List[str] = list(df.columns)
        for col, name in enumerate(columns, start=1):
            cell = ws.cell(row=header_row, column=col, value=HEADERS.get(name, name))
            cell.font = self.header_font
            cell.fill = self.header_fill
            cell.alignment = self.center_align
            cell.border = self.thin_border
            ws.column_dimensions[get_column_letter(col)].width = max(12, len(cell.value) + 4)

        row = header_row
        for record in df.to_dict(orient="records"):
            row += 1
            for col, name in enumerate(columns, start=1):
                cell = ws.cell(row=row, column=col, value=_to_cell_value(record[name]))
                cell.border = self.thin_border
                if name in AMOUNT_COLUMNS:
                    cell.number_format = AMOUNT_FORMAT
                elif name == "share_pct":
                    cell.number_format = PERCENT_FORMAT

        return row


def _to_cell_value(value):
    """Convert numpy scalars from DataFrames into plain Python values."""
    if hasattr(value, "item"):
        return value.item()
    return value
