from __future__ import annotations

import logging
from dataclasses import dataclass, asdict

import streamlit as st
from dotenv import load_dotenv

from ppm_generator.config import Settings, configure_logging, load_settings
from ppm_generator.errors import ImageReadError
from ppm_generator.file_utils import image_payload_from_upload
from ppm_generator.models import PPMFormInputs
from ppm_generator.pdf_export import markdown_to_pdf_bytes
from ppm_generator.ui_state import (
    AnalyzerViewState,
    ChatViewState,
    PPMViewState,
    run_image_analysis,
    run_ppm_generation,
    select_image,
    submit_chat_message,
)
from ppm_generator.word_export import build_doc_export, safe_filename

load_dotenv()  # Load .env file if present to set GEMINI_API_KEY, etc.

logger = logging.getLogger(__name__)


SECTIONS = {
    "ppm": "PPM Generator",
    "chat": "AI Chat",
    "image": "Image Analyzer",
}

# Multi-line fields get a text area instead of a single-line input
LONG_FIELDS = ("learning_outcomes", "learning_objectives", "content")


@dataclass
class FormState:
    """
    Current values of the PPM form, kept in st.session_state so they survive reruns.
    Defaults match the ones teachers are shown on first load.
    """
    institution_name: str = "Madrasah Aliyah Negeri 1"
    teacher_name: str = "Harmaji"
    subject: str = "Pendidikan Agama Islam"
    phase: str = "Fase E"
    grade: str = "X"
    semester: str = "Ganjil"
    time_allocation: str = "90 menit"
    learning_outcomes: str = ""
    learning_objectives: str = ""
    content: str = ""


def _init_state() -> None:
    """
    Streamlit reruns the script on every interaction; create each view's
    state object only on the first run.
    """
    if "section" not in st.session_state:
        st.session_state.section = "ppm"
    if "form" not in st.session_state:
        st.session_state.form = FormState()
    if "ppm_view" not in st.session_state:
        st.session_state.ppm_view = PPMViewState()
    if "chat_view" not in st.session_state:
        st.session_state.chat_view = ChatViewState()
    if "analyzer_view" not in st.session_state:
        st.session_state.analyzer_view = AnalyzerViewState()
    if "upload_id" not in st.session_state:
        st.session_state.upload_id = None


def render_ppm(settings: Settings) -> None:
    form: FormState = st.session_state.form
    view: PPMViewState = st.session_state.ppm_view
    labels = PPMFormInputs.field_labels()

    col_left, col_right = st.columns([1, 1], vertical_alignment="top")

    with col_left:
        st.subheader("Input Data PPM")
        with st.form("ppm_form"):
            for name, label in labels.items():
                current = getattr(form, name)
                if name in LONG_FIELDS:
                    value = st.text_area(label, value=current, height=100)
                elif name == "time_allocation":
                    value = st.text_input(label, value=current, placeholder="Contoh: 90 menit")
                else:
                    value = st.text_input(label, value=current)
                setattr(form, name, value)

            submitted = st.form_submit_button(
                "Generating PPM..." if view.is_loading else "Generate PPM",
                type="primary",
                disabled=view.is_loading,
                use_container_width=True,
            )

        if submitted:
            try:
                inputs = PPMFormInputs.from_mapping(asdict(form))
            except ValueError as e:
                view.error = str(e)
                view.output = ""
            else:
                with st.spinner("Menyiapkan Perencanaan Pembelajaran Mendalam..."):
                    run_ppm_generation(view, inputs, settings=settings)

    with col_right:
        if view.error:
            st.error(f"**Error Generating PPM**\n\n{view.error}")
            st.caption("Pastikan semua input terisi dengan benar dan API Key Anda valid.")
        elif not view.output:
            st.info(
                "PPM yang dihasilkan akan muncul di sini setelah Anda mengisi form "
                "dan mengklik 'Generate PPM'."
            )
        else:
            st.markdown(view.output)

            author = form.teacher_name or settings.export_author
            export = build_doc_export(view.output, author=author)
            if export is not None:
                st.download_button(
                    "Export ke Microsoft Word (.doc)",
                    data=export.data,
                    file_name=export.file_name,
                    mime=export.mime,
                    use_container_width=True,
                )

            base_name = export.file_name.rsplit(".", 1)[0] if export else safe_filename(author)
            try:
                pdf_bytes = markdown_to_pdf_bytes(view.output)
            except Exception:
                # only the PDF download is lost; preview and .doc stay usable
                logger.exception("PDF export failed")
                pdf_bytes = None
            st.download_button(
                "Download PDF",
                data=pdf_bytes or b"",
                file_name=f"{base_name}.pdf",
                mime="application/pdf",
                disabled=pdf_bytes is None,
                use_container_width=True,
            )
            if pdf_bytes is None:
                st.caption("PDF tidak dapat dibuat untuk hasil ini.")
            st.download_button(
                "Download Markdown",
                data=view.output.encode("utf-8"),
                file_name=f"{base_name}.md",
                mime="text/markdown",
                use_container_width=True,
            )


def render_chat(settings: Settings) -> None:
    view: ChatViewState = st.session_state.chat_view

    if not len(view.history):
        st.caption("Mulai percakapan dengan Gemini AI...")

    for msg in view.history:
        with st.chat_message(msg.sender):
            st.write(msg.text)

    text = st.chat_input("Tanyakan sesuatu pada Gemini...", disabled=view.is_loading)
    if text:
        with st.chat_message("user"):
            st.write(text)
        with st.chat_message("assistant"):
            with st.spinner("Typing..."):
                submit_chat_message(view, text, settings=settings)
        st.rerun()


def render_analyzer(settings: Settings) -> None:
    view: AnalyzerViewState = st.session_state.analyzer_view

    col_left, col_right = st.columns([1, 1], vertical_alignment="top")

    with col_left:
        st.subheader("Unggah & Analisis Gambar")
        uploaded = st.file_uploader("Pilih Gambar", type=["png", "jpg", "jpeg", "webp", "gif"])

        # A new upload supersedes the previous image; removing it clears the preview.
        upload_id = None
        if uploaded is not None:
            upload_id = getattr(uploaded, "file_id", None) or (uploaded.name, uploaded.size)
        if upload_id != st.session_state.upload_id:
            st.session_state.upload_id = upload_id
            if uploaded is None:
                select_image(view, None)
            else:
                try:
                    select_image(view, image_payload_from_upload(uploaded))
                except ImageReadError as e:
                    select_image(view, None)
                    view.error = str(e)

        if view.image is not None:
            st.markdown("**Pratinjau Gambar:**")
            st.image(uploaded, use_container_width=True)

        view.prompt = st.text_area(
            "Prompt Analisis",
            value=view.prompt,
            height=90,
            placeholder="Misal: Jelaskan objek-objek di gambar ini...",
            disabled=view.is_loading,
        )

        if view.error:
            st.error(view.error)

        run = st.button(
            "Menganalisis Gambar..." if view.is_loading else "Analisis Gambar",
            type="primary",
            disabled=view.is_loading or view.image is None or not view.prompt.strip(),
            use_container_width=True,
        )
        if run:
            with st.spinner("Menganalisis..."):
                run_image_analysis(view, settings=settings)
            st.rerun()

    with col_right:
        st.subheader("Hasil Analisis")
        if view.result:
            st.markdown(view.result)
        elif not view.error:
            st.caption("Hasil analisis akan muncul di sini.")


def main() -> None:
    st.set_page_config(page_title="PPM Generator & AI Assistant", layout="wide")

    _init_state()
    # Re-read on every rerun so a changed key is picked up without a restart
    settings = load_settings()
    configure_logging(settings.log_level)

    st.title("PPM Generator & AI Assistant")
    st.caption("Oleh: HARMAJI")

    with st.sidebar:
        keys = list(SECTIONS.keys())
        st.session_state.section = st.radio(
            "Menu",
            options=keys,
            format_func=lambda k: SECTIONS.get(k, k),
            index=keys.index(st.session_state.section),
        )
        if not settings.api_key:
            st.warning("API key belum diatur (GEMINI_API_KEY).")

    section = st.session_state.section
    if section == "chat":
        render_chat(settings)
    elif section == "image":
        render_analyzer(settings)
    else:
        render_ppm(settings)


if __name__ == "__main__":
    main()
