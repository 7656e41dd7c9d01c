"""
招商智能匹配 Agent - Streamlit front end
Run:
streamlit run streamlit_app.py
"""
import logging

import streamlit as st

from fallback_data import EXAMPLE_REQUIREMENTS
from match_service import analyze_company, assess_company, search
from news_service import load_news
from render import CSS, render_analysis, render_company_card, render_news_item, render_profile, render_report

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

st.set_page_config(page_title="招商智能匹配 Agent", layout="wide", page_icon="🏢")
st.markdown(CSS, unsafe_allow_html=True)
st.title("招商智能匹配 Agent")
st.caption("AI 驱动的企业智能匹配系统")


@st.cache_data(show_spinner=False, ttl=3600)
def cached_news(limit: int = 20):
    return load_news(limit=limit)


@st.cache_data(show_spinner=False, ttl=3600)
def cached_analysis(requirement_text: str, company: dict):
    return analyze_company(requirement_text, company)


@st.cache_data(show_spinner=False, ttl=3600)
def cached_assessment(requirement_text: str, company: dict, match: dict):
    return assess_company(requirement_text, company, match)


for key, default in {"requirement": "", "result": None, "selected": None}.items():
    if key not in st.session_state:
        st.session_state[key] = default

left, right = st.columns([5, 7])

with left:
    st.subheader("输入招商需求")
    st.caption("用自然语言描述您的招商需求，AI 将自动理解并匹配最合适的企业")
    st.write("试试这些示例：")
    for index, example in enumerate(EXAMPLE_REQUIREMENTS):
        label = example if len(example) <= 30 else example[:30] + "..."
        if st.button(label, key=f"example-{index}"):
            st.session_state.requirement = example

    requirement = st.text_area(
        "招商需求",
        value=st.session_state.requirement,
        height=120,
        placeholder="例：找过去一年在上海/苏州融资的 AI 医疗公司，最好有A/B轮，有头部基金投资，适合入驻创新园区。",
    )
    live = st.checkbox("AI 实时搜索企业（不使用内置企业库）", value=False)

    if st.button("智能匹配企业", type="primary", disabled=not requirement.strip()):
        st.session_state.requirement = requirement.strip()
        st.session_state.selected = None
        with st.spinner("正在智能匹配企业..."):
            st.session_state.result = search(st.session_state.requirement, live=live)
        st.success(f"找到 {st.session_state.result['total']} 家符合条件的企业")

    result = st.session_state.result
    if result:
        chips = render_profile(result["profile"])
        if chips:
            st.markdown(chips, unsafe_allow_html=True)

    st.subheader("推荐资讯")
    st.caption("每日更新")
    news = cached_news()
    if not news:
        st.write("暂无最新资讯")
    for item in news[:10]:
        st.markdown(render_news_item(item), unsafe_allow_html=True)

with right:
    result = st.session_state.result
    if not result:
        st.info("在左侧输入您的招商需求，AI 将自动分析并为您匹配最合适的企业")
    elif not result["matches"]:
        st.warning("暂无匹配结果，请尝试调整您的需求描述")
    else:
        st.markdown(f"匹配到 **{len(result['matches'])}** 家企业 · 按匹配度排序")
        for match in result["matches"]:
            st.markdown(render_company_card(match), unsafe_allow_html=True)
            if st.button("查看评估报告", key=f"select-{match['company_id']}"):
                st.session_state.selected = match["company_id"]

selected = st.session_state.selected
result = st.session_state.result
if selected and result:
    match = next((m for m in result["matches"] if m["company_id"] == selected), None)
    if match:
        company = match["company"]
        st.divider()
        st.header(company["name"])
        st.caption(f"{company['city']} · {company['track']}")

        with st.spinner("正在分析中..."):
            analysis = cached_analysis(st.session_state.requirement, company)
            assessment = cached_assessment(st.session_state.requirement, company, match)

        st.markdown(render_analysis(analysis), unsafe_allow_html=True)
        panels = render_report(company, assessment, match)
        cols = st.columns(2)
        for index, (title, body) in enumerate(panels):
            with cols[index % 2]:
                st.markdown(f'<div class="zs-panel"><h4>{title}</h4>{body}</div>', unsafe_allow_html=True)
        if st.button("关闭"):
            st.session_state.selected = None
            st.rerun()

st.caption("招商智能匹配 Agent Demo · AI 输出仅供参考")
