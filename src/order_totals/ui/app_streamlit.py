"""
Streamlit UI for order totals.

Features:
- Editable line grid with live totals
- Toggle for line-level discount/tax/surcharges
- Per-line breakdown and computation trace
- Batch totals for an uploaded document export
- Export to CSV
"""
import streamlit as st
import pandas as pd
from datetime import datetime

from order_totals.config.logging_config import configure_logging
from order_totals.config.settings import get_settings
from order_totals.engine import ComputeOptions, TotalsCalculator, compute_breakdown, validate_lines
from order_totals.engine.models import LineItem
from order_totals.services.document_service import summarize_documents


st.set_page_config(
    page_title="Order Totals",
    layout="wide",
    initial_sidebar_state="expanded"
)

LINE_COLUMNS = [
    'code', 'description', 'quantity', 'unit_price', 'factor',
    'discount_percent', 'tax_percent', 'excise_amount', 'other_fee_amount',
]


@st.cache_resource
def get_calculator():
    """Get cached calculator instance."""
    settings = get_settings()
    configure_logging(settings.log_level)
    return TotalsCalculator(max_entries=settings.cache_size)


def empty_lines() -> pd.DataFrame:
    return pd.DataFrame([{
        'code': 'SKU-001', 'description': 'Sample item', 'quantity': 1.0,
        'unit_price': 100.0, 'factor': 1.0, 'discount_percent': 0.0,
        'tax_percent': 18.0, 'excise_amount': 0.0, 'other_fee_amount': 0.0,
    }], columns=LINE_COLUMNS)


def frame_to_lines(df: pd.DataFrame) -> list[LineItem]:
    """Convert edited grid rows into LineItems; blank cells are absent."""
    lines = []
    for row in df.to_dict(orient='records'):
        cleaned = {k: (None if pd.isna(v) else v) for k, v in row.items()}
        if cleaned.get('quantity') is None and cleaned.get('unit_price') is None:
            continue
        lines.append(LineItem.from_dict(cleaned))
    return lines


calculator = get_calculator()
settings = get_settings()


# ============================================================================
# SIDEBAR: Calculation Options
# ============================================================================
with st.sidebar:
    st.header("⚙️ Calculation Options")

    with st.container(border=True):
        include_line_level = st.toggle(
            "Line-level discount, tax & surcharges",
            value=settings.include_line_level_calculations,
            help="Off = raw quantity × factor × price totals only",
        )

    options = ComputeOptions(include_line_level_calculations=include_line_level)

    st.divider()
    stats = calculator.stats()
    st.caption(f"Cache: {stats['entries']} entries | {stats['hits']} hits | {stats['misses']} misses")


# ============================================================================
# MAIN CONTENT: TABBED INTERFACE
# ============================================================================
st.title("Order Totals")
st.caption(f"v1.0 | Totals Engine Active | {datetime.now().strftime('%Y-%m-%d')}")

tab1, tab2 = st.tabs(["🧾 Document", "📦 Batch"])


# ============================================================================
# TAB 1: DOCUMENT LINES
# ============================================================================
with tab1:
    if 'lines_df' not in st.session_state:
        st.session_state.lines_df = empty_lines()

    col1, col2 = st.columns([1.8, 1.2], gap="large")

    with col1:
        st.subheader("Line Items")
        edited_df = st.data_editor(
            st.session_state.lines_df,
            use_container_width=True,
            num_rows="dynamic",
            column_config={
                "code": st.column_config.TextColumn("Code"),
                "description": st.column_config.TextColumn("Description"),
                "quantity": st.column_config.NumberColumn("Qty"),
                "unit_price": st.column_config.NumberColumn("Unit Price", format="%.2f"),
                "factor": st.column_config.NumberColumn("Factor"),
                "discount_percent": st.column_config.NumberColumn("Disc %"),
                "tax_percent": st.column_config.NumberColumn("Tax %"),
                "excise_amount": st.column_config.NumberColumn("Excise", format="%.2f"),
                "other_fee_amount": st.column_config.NumberColumn("Other Fee", format="%.2f"),
            },
            hide_index=True,
            key="lines_editor"
        )
        lines = frame_to_lines(edited_df)

        validation = validate_lines(lines)
        for error in validation.errors:
            st.error(error)
        for warning in validation.warnings:
            st.warning(warning)

    with col2:
        st.subheader("Summary")

        with st.container(border=True):
            totals = calculator.calculate(lines, options)

            m1, m2 = st.columns(2)
            m1.metric("Grand Total", f"${totals.grand_total:,.2f}")
            m2.metric("Items", f"{totals.item_quantity_total:g}")

            st.divider()
            summary_rows = [
                ("Subtotal", totals.subtotal),
                ("Discount", -totals.discount_total),
                ("Net Amount", totals.net_amount),
                ("Tax", totals.tax_total),
                ("Excise", totals.excise_total),
                ("Other Fees", totals.other_fee_total),
            ]
            for label, value in summary_rows:
                c1, c2 = st.columns([2, 1])
                c1.caption(label)
                c2.markdown(f"**${value:,.2f}**")

            st.divider()
            btn_col1, btn_col2 = st.columns(2)
            with btn_col1:
                st.download_button(
                    "📥 CSV",
                    data=edited_df.to_csv(index=False),
                    file_name="document_lines.csv",
                    mime="text/csv",
                    use_container_width=True
                )
            with btn_col2:
                if st.button("🗑️ Clear", use_container_width=True):
                    st.session_state.lines_df = empty_lines().iloc[0:0]
                    st.rerun()

    with st.expander("📊 View Detailed Line Breakdown"):
        breakdown = compute_breakdown(lines, options)
        display_data = [{
            'Line': line.index + 1,
            'Qty': line.quantity,
            'Raw': f"${line.raw:.2f}",
            'Discount': f"${line.discount:.2f}",
            'Net': f"${line.net:.2f}",
            'Tax': f"${line.tax:.2f}",
            'Excise': f"${line.excise:.2f}",
            'Fee': f"${line.other_fee:.2f}",
            'Line Total': f"${line.line_total:.2f}",
        } for line in breakdown.lines]
        st.dataframe(pd.DataFrame(display_data), use_container_width=True, hide_index=True)
        st.code(breakdown.get_trace_text(), language=None)


# ============================================================================
# TAB 2: BATCH DOCUMENT TOTALS
# ============================================================================
with tab2:
    st.subheader("📦 Document Export")
    st.caption("Upload a CSV with a `document_id` column and one row per line item.")

    uploaded = st.file_uploader("Document lines", type=["csv"], label_visibility="collapsed")
    if uploaded is not None:
        try:
            source_df = pd.read_csv(uploaded, dtype=str)
            summary = summarize_documents(source_df, options)
        except ValueError as e:
            st.error(f"Could not summarize export: {e}")
        else:
            st.dataframe(summary, use_container_width=True, hide_index=True)
            st.caption(f"Documents: {len(summary):,} | Grand total: ${summary['grand_total'].sum():,.2f}")
            st.download_button(
                "📥 Summary CSV",
                data=summary.to_csv(index=False),
                file_name="document_totals.csv",
                mime="text/csv",
            )
