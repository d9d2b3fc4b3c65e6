import streamlit as st

# MUST be the first Streamlit command
st.set_page_config(layout="wide", page_title="Résumé Optimizer")

from resume_optimizer import config
from resume_optimizer.errors import ResumeOptimizerError
from resume_optimizer.extractor import DOCX, extract_text, file_type_label, guess_mime_type
from resume_optimizer.feedback import feedback_text, improve_resume, request_feedback
from resume_optimizer.forms import REQUEST_FIELD, request_errors, validate_form
from resume_optimizer.generator_rule import resume_to_text
from resume_optimizer.logging_utils import setup_logging
from resume_optimizer.parser_rule import parse_resume_rule
from resume_optimizer.render import export_filename, render_docx, render_pdf

setup_logging(config.LOG_LEVEL)

# Initialize session state variables
_DEFAULTS = {
    "resume_text": "",
    "feedback": None,
    "improved_resume": None,
    "form_errors": {},
    "uploader_key": 0,
}
for _key, _value in _DEFAULTS.items():
    if _key not in st.session_state:
        st.session_state[_key] = _value


def reset_form():
    """Clear results and the uploaded file (a new uploader key drops the file)."""
    for key, value in _DEFAULTS.items():
        if key != "uploader_key":
            st.session_state[key] = value
    st.session_state.uploader_key += 1


def show_error(field: str):
    if msg := st.session_state.form_errors.get(field):
        st.error(msg)


st.title("📄 Résumé Optimizer")
st.markdown("AI-powered résumé optimization tailored to any job description")

if st.session_state.feedback is None:
    st.markdown("### 📤 Optimize Your Résumé")

    upload = st.file_uploader(
        "Upload résumé *",
        type=["pdf", "docx", "txt"],
        key=f"uploader_{st.session_state.uploader_key}",
        help="For best results with PDFs, ensure they contain selectable text (not scanned images)",
    )
    if upload is not None:
        st.caption(f"✅ {upload.name} ({file_type_label(upload.type)})")
    show_error("resume_file")

    job_description = st.text_area("Job description *", height=180,
                                   placeholder="Paste the job description here...")
    show_error("job_description")

    st.markdown("### 🤖 AI Model Configuration")
    st.caption("Supports OpenAI, Anthropic, Gemini or your own endpoint. "
               "API key is optional for public endpoints.")
    col1, col2 = st.columns(2)
    with col1:
        endpoint = st.text_input("API endpoint *", value=config.LLM_ENDPOINT)
        show_error("endpoint")
    with col2:
        model = st.text_input("Model name *", value=config.get_model_for_provider())
        show_error("model")
    api_key = st.text_input("API key", type="password", value="")

    if st.button("🔍 Analyze résumé", type="primary"):
        st.session_state.form_errors = validate_form(upload, job_description, endpoint, model)
        if not st.session_state.form_errors:
            progress = st.progress(0, text="Reading résumé...")
            try:
                mime = upload.type or guess_mime_type(upload.name)
                text = extract_text(upload.getvalue(), mime)
                st.session_state.resume_text = text
                progress.progress(50, text="Asking the model for feedback...")
                st.session_state.feedback = request_feedback(
                    text, job_description, endpoint.strip(), model.strip(), api_key or None
                )
                st.session_state.job_description = job_description
                st.session_state.llm_settings = (endpoint.strip(), model.strip(), api_key or None)
                progress.progress(100, text="Done")
            except (ResumeOptimizerError, ValueError) as e:
                progress.empty()
                st.session_state.form_errors = request_errors(e)
        st.rerun()
    show_error(REQUEST_FIELD)

else:
    st.markdown("### 💡 Feedback")
    st.caption("Your résumé has been analyzed. Review the feedback and then improve your résumé.")
    for i, item in enumerate(st.session_state.feedback, 1):
        st.markdown(f"**{i}.** {feedback_text(item)}")

    col1, col2 = st.columns(2)
    with col1:
        if st.button("✨ Improve résumé", type="primary"):
            endpoint, model, api_key = st.session_state.llm_settings
            with st.spinner("Rewriting your résumé..."):
                try:
                    st.session_state.improved_resume = improve_resume(
                        st.session_state.resume_text, st.session_state.feedback,
                        endpoint, model, api_key,
                    )
                except (ResumeOptimizerError, ValueError) as e:
                    st.error(f"An unexpected error occurred while improving résumé: {e}")
    with col2:
        st.button("↩️ Start over", on_click=reset_form)

    if st.session_state.improved_resume:
        improved = st.session_state.improved_resume
        record = parse_resume_rule(improved)

        st.divider()
        st.subheader("🎯 Improved Résumé")
        professional = st.toggle("Professional view", value=True)
        if professional:
            st.code(resume_to_text(record), language=None)
        else:
            st.text(improved)

        # structured view drops sections the parser has no bucket for
        source = record if professional else improved
        col1, col2 = st.columns(2)
        with col1:
            st.download_button(
                label="📥 Download PDF",
                data=render_pdf(source),
                file_name=export_filename(record, "pdf"),
                mime="application/pdf",
                use_container_width=True,
            )
        with col2:
            st.download_button(
                label="📥 Download DOCX",
                data=render_docx(source),
                file_name=export_filename(record, "docx"),
                mime=DOCX,
                use_container_width=True,
            )
