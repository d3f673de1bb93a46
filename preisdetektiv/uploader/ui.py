"""Streamlit page: ``streamlit run preisdetektiv/uploader/ui.py``"""

import streamlit as st

from preisdetektiv.uploader.session import UploaderSession, UploaderState
from preisdetektiv.uploader.view import (
    APP_SUBTITLE,
    APP_TITLE,
    EXPLANATION_LABEL,
    RESET_LABEL,
    UPLOAD_HINT,
    UPLOAD_LABEL,
    UPLOAD_TYPES,
    result_rows,
    submit_label,
)


ANALYSIS_REQUESTED = "analysis_requested"


def _start_analysis(session: UploaderSession) -> None:
    if session.begin_submit():
        st.session_state[ANALYSIS_REQUESTED] = True


def _get_session() -> UploaderSession:
    if "uploader" not in st.session_state:
        st.session_state.uploader = UploaderSession()
    return st.session_state.uploader


def _handle_upload(session: UploaderSession) -> None:
    uploaded = st.file_uploader(
        UPLOAD_LABEL,
        type=UPLOAD_TYPES,
        key=f"upload-{session.input_generation}",
    )
    st.caption(UPLOAD_HINT)
    if uploaded is None:
        return
    # Streamlit wiederholt das Skript bei jeder Interaktion, nur neue Dateien normalisieren
    if session.image_source == (uploaded.name, uploaded.size):
        return
    session.select_image(uploaded.getvalue(), uploaded.type, uploaded.name)


def _render_result(session: UploaderSession) -> None:
    result = session.result
    if session.state != UploaderState.RESOLVED or result is None:
        return
    st.divider()
    st.subheader(result.product_name)
    left, right = st.columns(2)
    with left:
        for label, value in result_rows(result):
            st.markdown(f"{label} **{value}**")
    with right:
        st.markdown(f"**{EXPLANATION_LABEL}**")
        st.write(result.explanation)


def main() -> None:
    st.set_page_config(page_title=APP_TITLE)
    session = _get_session()

    st.title(APP_TITLE)
    st.write(APP_SUBTITLE)

    _handle_upload(session)
    if session.image is not None and session.image.normalized:
        st.image(session.image.data, caption="Hochgeladenes Produkt")
    elif session.image is not None:
        # z.B. HEIC: nicht dekodierbar, wird unverändert gesendet
        st.caption(f"Hochgeladenes Produkt: {session.image.filename}")

    submit_col, reset_col = st.columns(2)
    with submit_col:
        # Der Callback läuft vor dem Skript, der Button wird also schon deaktiviert gezeichnet
        st.button(
            submit_label(session.is_submitting),
            key="analyze",
            disabled=session.is_submitting,
            type="primary",
            on_click=_start_analysis,
            args=(session,),
        )
    with reset_col:
        if (
            session.image is not None
            and not session.is_submitting
            and st.button(RESET_LABEL, key="reset")
        ):
            session.reset()
            st.rerun()

    if st.session_state.pop(ANALYSIS_REQUESTED, False):
        with st.spinner(submit_label(True)):
            session.finish_submit()
        st.rerun()

    if session.error:
        st.error(session.error)
    _render_result(session)


main()
