"""
Streamlit UI for the PDF Rule Checker.

Provides a single-page interface for uploading a PDF, entering three rules,
invoking the verification service through the submission workflow, and
rendering per-rule results.

Run with: streamlit run pdf_rule_checker/ui/app.py
"""

import html

import streamlit as st

from pdf_rule_checker.core.config import ADVERTISED_FILE_HINT, RULE_SLOTS
from pdf_rule_checker.core.logging_config import configure_structured_logging
from pdf_rule_checker.core.settings import app_settings
from pdf_rule_checker.ui.session import (
    PENDING_SUBMIT_KEY,
    request_submit,
    run_pending_submit,
    submit_disabled,
    sync_uploaded_file,
)
from pdf_rule_checker.workflow.controller import SubmissionWorkflow
from pdf_rule_checker.workflow.models import WorkflowStatus
from pdf_rule_checker.workflow.rendering import COLUMNS, build_result_rows, results_summary


@st.cache_resource
def _init_logging() -> bool:
    configure_structured_logging(level=app_settings.LOG_LEVEL, json_format=app_settings.LOG_JSON)
    return True


_init_logging()

# --- Page setup ---
st.set_page_config(page_title="PDF Rule Checker", layout="centered")

st.title("PDF Rule Checker")
st.write("Upload a PDF and check it against your rules.")

# --- Simple CSS tweaks ---
st.markdown(
    """
<style>
.block-container{max-width:980px;padding-top:1.25rem;}
.hint{color:#9ca3af;font-size:0.8rem;margin:0.25rem 0 1rem 0;}
.tag{display:inline-block;padding:2px 10px;border-radius:999px;font-size:0.75rem;font-weight:600;}
.tag.positive{background:#dcfce7;color:#166534;}
.tag.negative{background:#fee2e2;color:#991b1b;}
.evidence{font-family:monospace;font-size:0.8rem;color:#374151;}
.evidence.none{color:#9ca3af;}
.placeholder{text-align:center;color:#9ca3af;padding:1.5rem 0;}
table.results{width:100%;border-collapse:collapse;}
table.results th{font-size:0.75rem;text-transform:uppercase;color:#6b7280;text-align:left;padding:8px;}
table.results td{vertical-align:top;padding:8px;border-top:1px solid #f3f4f6;font-size:0.875rem;}
table.results .num{text-align:right;}
</style>
""",
    unsafe_allow_html=True,
)

# --- Session state: one workflow per browser session ---
if "workflow" not in st.session_state:
    st.session_state.workflow = SubmissionWorkflow()
    st.session_state.widget_nonce = 0

workflow: SubmissionWorkflow = st.session_state.workflow


def _clear_widgets() -> None:
    # New widget keys make Streamlit drop the old uploader/text values
    st.session_state.widget_nonce += 1


def _on_reset() -> None:
    workflow.reset()
    _clear_widgets()


def _on_remove_file() -> None:
    workflow.remove_file()
    _clear_widgets()


nonce = st.session_state.widget_nonce

# --- File input ---
uploaded_file = st.file_uploader(
    "Upload PDF",
    type=["pdf"],
    accept_multiple_files=False,
    key=f"file_{nonce}",
)
st.markdown(f'<div class="hint">{html.escape(ADVERTISED_FILE_HINT)}</div>', unsafe_allow_html=True)

sync_uploaded_file(workflow, uploaded_file)

for warning in workflow.file_warnings:
    st.warning(warning)

if workflow.submission.selected_file is not None:
    st.button("Remove File", on_click=_on_remove_file)

# --- Rules ---
st.markdown("**Rules**")
for i in range(RULE_SLOTS):
    text = st.text_input(
        f"{i + 1}.",
        value=workflow.rules[i],
        placeholder=f"Enter rule {i + 1}",
        key=f"rule_{i}_{nonce}",
    )
    if text != workflow.rules[i]:
        workflow.edit_rule(i, text)
st.caption("Tip: Be clear and specific for the best LLM results.")

# --- Actions ---
col1, col2, col3 = st.columns([2, 1, 2])
with col1:
    st.button(
        "Check Document",
        type="primary",
        on_click=request_submit,
        args=(st.session_state,),
        disabled=submit_disabled(st.session_state, workflow),
    )
with col2:
    st.button("Reset", on_click=_on_reset)

if st.session_state.get(PENDING_SUBMIT_KEY, False):
    with st.spinner("Checking…"):
        run_pending_submit(st.session_state, workflow)
    # Redraw so the Check button is enabled again
    st.rerun()

with col3:
    st.markdown(f"**{results_summary(workflow.results)}**")

if workflow.state.status == WorkflowStatus.FAILED and workflow.state.error:
    st.error(workflow.state.error)

# --- Results ---
st.subheader("Results")


def _render_table() -> str:
    head = "".join(
        f'<th class="num">{c}</th>' if c == "Confidence" else f"<th>{c}</th>" for c in COLUMNS
    )
    body = []
    for row in build_result_rows(workflow.results):
        if row.placeholder:
            body.append(
                f'<tr><td class="placeholder" colspan="{len(COLUMNS)}">{html.escape(row.rule)}</td></tr>'
            )
            continue
        evidence_cls = "evidence" if row.evidence_located else "evidence none"
        body.append(
            "<tr>"
            f"<td>{html.escape(row.rule)}</td>"
            f'<td><span class="tag {row.status_tag}">{row.status_label}</span></td>'
            f'<td><span class="{evidence_cls}" title="{html.escape(row.evidence)}">'
            f"{html.escape(row.evidence)}</span></td>"
            f"<td>{html.escape(row.reasoning)}</td>"
            f'<td class="num">{row.confidence}</td>'
            "</tr>"
        )
    return f'<table class="results"><thead><tr>{head}</tr></thead><tbody>{"".join(body)}</tbody></table>'


st.markdown(_render_table(), unsafe_allow_html=True)
st.caption(
    "Note: Evidence is strictly validated against page/line text on the server. "
    "If the server can't verify a claimed Page/Line, it will show \"No evidence found\"."
)
