from __future__ import annotations

import json

import streamlit as st

from feistelab.cipher.codec import format_hex, pad_plaintext, text_to_block
from feistelab.config import load_settings
from feistelab.errors import FeistelabError
from feistelab.evaluation.report import EvaluationReport
from feistelab.evaluation.roundtrip import run_roundtrip_tests
from feistelab.evaluation.sbox_analysis import analyze_sbox
from feistelab.formatting import format_binary, format_round_keys, format_round_trace
from feistelab.session import CipherSession


st.set_page_config(page_title="Feistel Cipher Lab", layout="wide")

settings = load_settings()

st.title("Feistel Cipher Lab - 64-bit block, 32 rounds, dynamic S-boxes")
st.caption("Research-only lab: encrypt/decrypt single blocks and inspect avalanche, differential and linear behaviour.")

# ---------- Sidebar: key ----------
st.sidebar.header("Master key")
key_hex = st.sidebar.text_input("64-bit key (16 hex characters)", value=settings.default_key)
key_mixing = st.sidebar.checkbox("Feed round keys into the round function", value=settings.key_mixing)

try:
    session = CipherSession.set_key(key_hex.strip(), key_mixing=key_mixing)
except FeistelabError as e:
    st.sidebar.error(str(e))
    st.stop()

with st.sidebar.expander("Round keys"):
    st.text("\n".join(format_round_keys(session.round_keys)))

tab_enc, tab_dec, tab_tests, tab_eval = st.tabs(["Encrypt", "Decrypt", "Cryptanalysis", "Evaluation"])

# ---------- Encrypt ----------
with tab_enc:
    plaintext = st.text_input("Plaintext (max 8 characters)", value="ABCDEFGH")
    if st.button("Encrypt"):
        try:
            block_in = text_to_block(pad_plaintext(plaintext))
        except FeistelabError as e:
            st.error(str(e))
        else:
            block, states = session.cipher.encrypt_traced(block_in)
            st.code(format_hex(block))
            st.text(format_binary(block))
            with st.expander("Round trace"):
                st.text("\n".join(format_round_trace(states, "Encryption")))

# ---------- Decrypt ----------
with tab_dec:
    ciphertext = st.text_input("Ciphertext (16 hex characters)", value="")
    if st.button("Decrypt"):
        try:
            raw, text = session.decrypt_block(ciphertext.strip())
        except FeistelabError as e:
            st.error(str(e))
        else:
            st.write(f'Decrypted Text: "{text}"')
            st.code(format_hex(int.from_bytes(raw, "big")))

# ---------- Single-sample tests ----------
with tab_tests:
    probe = st.text_input("Input (max 8 characters, zero padded)", value="TESTTEST")
    try:
        results = [
            session.run_avalanche_test(probe),
            session.run_differential_test(probe),
            session.run_linear_test(probe),
        ]
    except FeistelabError as e:
        st.error(str(e))
    else:
        for r in results:
            st.write(r.summary())
        st.json(json.dumps([r.to_dict() for r in results]))

# ---------- Evaluation ----------
with tab_eval:
    vectors = st.slider("Roundtrip vectors", min_value=10, max_value=5000, value=200, step=10)
    sbox_round = st.slider("S-box round", min_value=1, max_value=32, value=1)
    if st.button("Run evaluation"):
        report = EvaluationReport(
            key_hex=session.key_hex,
            key_mixing=key_mixing,
            roundtrip_results=[run_roundtrip_tests(num_vectors=vectors, seed=settings.global_seed, key_mixing=key_mixing)],
            sbox_results=[analyze_sbox(sbox_round - 1)],
        )
        st.text(report.to_summary())
