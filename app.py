import logging

import streamlit as st
import pandas as pd
import plotly.express as px

from tries import KeyNotFound, Trie, TrieConfig
from components.work_loads import KINDS, WorkLoad
from components.benchmark import BenchConfig, benchmark_with_stats, build_trie, summarize, trie_stats

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger("triekit.app")

# Configure page
st.set_page_config(
    page_title="Trie Explorer",
    page_icon="🌳",
    layout="wide",
    initial_sidebar_state="expanded"
)

if "trie" not in st.session_state:
    st.session_state["trie"] = Trie()

# Main title
st.title("🌳 Trie Explorer & Benchmark")
st.markdown("---")

# Sidebar
with st.sidebar:
    st.header("Navigation")
    page = st.selectbox(
        "Choose a section:",
        ["Home", "Explorer", "Benchmark"]
    )

    st.markdown("---")
    st.subheader("Trie Options")
    wildcard = st.text_input("Wildcard", value=".", max_chars=1)
    count_overwrites = st.checkbox("Count overwrites toward size", value=True)

    st.markdown("---")
    st.subheader("Quick Actions")
    if st.button("🗑️ Reset Trie"):
        try:
            st.session_state["trie"] = Trie(TrieConfig(wildcard=wildcard, count_overwrites=count_overwrites))
            st.rerun()
        except ValueError as e:
            st.error(f"❌ {e}")

trie = st.session_state["trie"]

if page == "Home":
    st.header("Current Trie")

    stats = trie_stats(trie)
    col1, col2, col3, col4 = st.columns(4)
    with col1:
        st.metric("Keys", stats["size"])
    with col2:
        st.metric("Depth", stats["depth"])
    with col3:
        st.metric("Nodes", stats["nodes"])
    with col4:
        st.metric("Avg Branching", f"{stats['avg_branch_factor']:.2f}")

    st.subheader("Load a Workload")
    kind = st.selectbox("Key kind", KINDS)
    n = st.number_input("Number of keys", min_value=1, max_value=200_000, value=1_000, step=500)
    seed = st.number_input("Seed", min_value=0, value=42)
    if st.button("📥 Load keys"):
        try:
            keys = WorkLoad(seed=int(seed)).keys(kind, int(n))
            st.session_state["trie"] = build_trie(keys, trie.config)
            logger.info("Loaded %d %s keys into the explorer trie", len(keys), kind)
            st.rerun()
        except ValueError as e:
            st.error(f"❌ Could not generate keys: {e}")

    if not trie.is_empty():
        st.subheader("Sample Keys")
        st.dataframe(pd.DataFrame({"key": trie.keys_with_prefix("", limit=50)}))

elif page == "Explorer":
    st.header("🔍 Explorer")

    col1, col2 = st.columns(2)

    with col1:
        st.subheader("Put / Get / Delete")
        key = st.text_input("Key")
        value = st.text_input("Value")
        b1, b2, b3 = st.columns(3)
        if b1.button("Put"):
            trie.put(key, value)
            st.success(f"✅ Stored {key!r}")
        if b2.button("Get"):
            try:
                st.info(f"{key!r} → {trie.get(key)!r}")
            except KeyNotFound as e:
                st.warning(str(e))
        if b3.button("Delete"):
            if trie.delete(key):
                st.success(f"✅ Deleted {key!r}")
            else:
                st.info(f"{key!r} was not stored")

    with col2:
        st.subheader("Queries")
        query = st.text_input("Prefix / query / pattern")
        limit = st.number_input("Max results", min_value=1, value=100)

        st.write("**Keys with prefix:**")
        st.write(trie.keys_with_prefix(query, limit=int(limit)))

        st.write("**Longest prefix:**")
        st.code(repr(trie.longest_prefix(query)))

        st.write("**Longest stored key:**")
        st.code(repr(trie.longest_key(query)))

        st.write(f"**Fuzzy match (wildcard {trie.config.wildcard!r}):**")
        st.write(trie.keys_with_fuzzy_match(query)[:int(limit)])

elif page == "Benchmark":
    st.header("📊 Benchmark")

    col1, col2 = st.columns(2)
    with col1:
        kind = st.selectbox("Key kind", KINDS, key="bench_kind")
        n = st.number_input("Number of keys", min_value=1, max_value=500_000, value=10_000, step=1_000)
        p_freq = st.slider("Prefix frequency (words only)", min_value=0.0, max_value=1.0, value=0.0)
    with col2:
        repeats = st.number_input("Repeats", min_value=1, max_value=20, value=3)
        sample_size = st.number_input("Sample size", min_value=1, value=1_000, step=100)
        seed = st.number_input("Seed", min_value=0, value=7, key="bench_seed")

    if st.button("▶️ Run benchmark"):
        try:
            workload = WorkLoad(seed=int(seed))
            if kind == "words":
                keys = workload.words(int(n), p_freq=p_freq)
            else:
                keys = workload.keys(kind, int(n))
            bench = BenchConfig(repeats=int(repeats), sample_size=int(sample_size), seed=int(seed))
            trie_config = TrieConfig(wildcard=wildcard, count_overwrites=count_overwrites)
            with st.spinner("Timing trie operations..."):
                frame, stats = benchmark_with_stats(keys, bench, trie_config)
            st.session_state["bench"] = frame
            st.session_state["bench_stats"] = stats
        except ValueError as e:
            st.error(f"❌ {e}")

    if "bench" in st.session_state:
        frame = st.session_state["bench"]
        summary = summarize(frame)

        fig = px.bar(summary, x="operation", y="median", error_y=summary["p95"] - summary["median"],
                     title="Throughput by operation (median, whisker to p95)")
        fig.update_layout(xaxis_title="Operation", yaxis_title="ops / sec")
        st.plotly_chart(fig, use_container_width=True)

        fig_rounds = px.line(frame, x="repeat", y="ops_per_sec", color="operation", markers=True,
                             title="Throughput per round")
        st.plotly_chart(fig_rounds, use_container_width=True)

        st.subheader("Summary")
        st.dataframe(summary)
        st.subheader("Structure")
        st.json(st.session_state["bench_stats"])

# Footer
st.markdown("---")
st.markdown(
    """
    <div style='text-align: center; color: #B0B0B0; padding: 1rem;'>
        Built with Streamlit 🚀 | triekit
    </div>
    """,
    unsafe_allow_html=True
)
