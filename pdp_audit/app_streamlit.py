# pdp_audit/app_streamlit.py
# run with: streamlit run pdp_audit/app_streamlit.py
import pandas as pd
import streamlit as st

from pdp_audit.categories import category_display_name
from pdp_audit.config import get_config
from pdp_audit.export import export_filename
from pdp_audit.fetcher import FetchError, is_valid_url
from pdp_audit.models import Status
from pdp_audit.pipeline import AnalysisSession, run_analysis, session_export_json, session_markdown
from pdp_audit.recommender import summarize_recommendations

STATUS_ICON = {Status.SUCCESS: "🟢", Status.WARNING: "🟡", Status.ERROR: "🔴"}
AUTO = "(auto-detect)"


# ---------------- Session state helpers ----------------

def _init_state():
    if "analysis" not in st.session_state:
        st.session_state.analysis = AnalysisSession()
    if "last_error" not in st.session_state:
        st.session_state.last_error = ""


def _analyze(url: str, category: str):
    session: AnalysisSession = st.session_state.analysis
    try:
        run_analysis(url, category=category, session=session)
        st.session_state.last_error = ""
    except (FetchError, ValueError) as e:
        st.session_state.last_error = f"Could not load the page: {e}"


def _specs_frame(report) -> pd.DataFrame:
    rows = [{"Specification": s, "Present": "✅"} for s in report.specs.found]
    rows += [{"Specification": s, "Present": "❌"} for s in report.specs.missing]
    return pd.DataFrame(rows, columns=["Specification", "Present"])


# ---------------- UI ----------------

def main():
    st.set_page_config(page_title="PDP Audit – Product Page Scorecard", layout="wide")
    _init_state()
    cfg = get_config()

    st.sidebar.header("Analyze a product page")
    url = st.sidebar.text_input("Product URL", value=st.session_state.analysis.url)
    options = [AUTO] + list(cfg.categories.keys())
    choice = st.sidebar.selectbox("Category", options,
                                  format_func=lambda c: c if c == AUTO else category_display_name(c, cfg))
    do_analyze = st.sidebar.button("Analyze")
    if st.sidebar.button("Clear"):
        st.session_state.analysis.clear()
        st.session_state.last_error = ""

    st.title("Product Page Content Audit")
    st.caption("Photos, specification completeness and description quality for one product page.")

    if do_analyze:
        if not url.strip():
            st.warning("Enter a product page URL.")
        elif not is_valid_url(url):
            st.error("Enter a valid http(s) URL.")
        else:
            with st.spinner("Loading and analyzing the page…"):
                _analyze(url.strip(), "" if choice == AUTO else choice)

    if st.session_state.last_error:
        st.error(st.session_state.last_error)

    session: AnalysisSession = st.session_state.analysis
    if not session.has_report:
        st.info("No analysis yet.")
        return

    report = session.report
    label = category_display_name(report.category, cfg)
    st.markdown(f"Category: **{label}**" + (" _(auto-detected)_" if session.category_detected else ""))

    # Scorecard
    c1, c2, c3 = st.columns(3)
    c1.metric(f"{STATUS_ICON[report.images.status]} Photos", report.images.total)
    c2.metric(f"{STATUS_ICON[report.specs.status]} Specifications", f"{report.specs.completeness}%")
    c3.metric(f"{STATUS_ICON[report.description.status]} Description", f"{report.description.words} words")

    with st.expander("🖼️ Photos", expanded=True):
        st.write(report.images.message)
        if report.images.images:
            st.image(list(report.images.images), width=140)

    with st.expander("⚙️ Specifications", expanded=True):
        st.write(report.specs.message)
        st.progress(report.specs.completeness / 100)
        if report.specs.total:
            st.dataframe(_specs_frame(report), use_container_width=True, hide_index=True)

    with st.expander("📝 Description", expanded=False):
        st.write(report.description.message)
        st.table(pd.DataFrame([{
            "Words": report.description.words,
            "Paragraphs": report.description.paragraphs,
            "Images": report.description.images,
            "Headings": report.description.headings,
        }]))

    st.subheader("💡 Recommendations")
    for line in summarize_recommendations(report, cfg):
        st.markdown(f"- {line}")

    col1, col2 = st.columns(2)
    col1.download_button("Download JSON", session_export_json(session, cfg),
                         file_name=export_filename(report.timestamp), mime="application/json")
    col2.download_button("Download Markdown", session_markdown(session, cfg),
                         file_name="report.md", mime="text/markdown")


if __name__ == "__main__":
    main()
