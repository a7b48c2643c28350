from __future__ import annotations

import streamlit as st

from cafeops.config import configure_logging, get_settings

st.set_page_config(page_title="Café ERP", page_icon="☕", layout="wide")
configure_logging(get_settings())

pages = [
    st.Page("home.py", title="Dashboard", icon="📈"),
    st.Page("pages/1_🧾_POS.py", title="POS", icon="🧾"),
    st.Page("pages/2_📦_Inventory.py", title="Inventory", icon="📦"),
    st.Page("pages/3_🧮_Bills.py", title="Bills", icon="🧮"),
    st.Page("pages/4_💰_Financials.py", title="Financials", icon="💰"),
    st.Page("pages/5_👥_Staff.py", title="Staff", icon="👥"),
    st.Page("pages/6_🧪_Data_Management.py", title="Data Management", icon="🧪"),
]

st.navigation(pages).run()
