from __future__ import annotations

import pandas as pd
import streamlit as st

from cafeops.config import get_settings
from cafeops.services.dashboard import dashboard_metrics
from cafeops.store import get_store
from cafeops.utils import fmt_money

settings = get_settings()
store = get_store()

st.title(f"☕ {settings.cafe_name} — Dashboard")

metrics = dashboard_metrics(store.snapshot(), store.clock())

c1, c2, c3, c4 = st.columns(4)
c1.metric("Today's Sales", fmt_money(metrics.todays_sales, settings.currency))
c2.metric("Low Stock Items", f"{len(metrics.low_stock)}")
c3.metric("Total Staff", f"{metrics.staff_count}")
c4.metric("Total Orders Today", f"{metrics.todays_orders}")

left, right = st.columns([2, 1])

with left:
    st.subheader("Sales — last 7 days")
    df = pd.DataFrame(
        [{"day": f"{d.label} {d.day:%d}", "sales": float(d.total)} for d in metrics.weekly_sales]
    )
    st.bar_chart(df.set_index("day"), y="sales")

with right:
    st.subheader("Best seller this month")
    if metrics.best_seller:
        st.write(f"**{metrics.best_seller.name}** — {metrics.best_seller.quantity} units sold")
    else:
        st.caption("No sales this month yet.")

    st.subheader("Low stock")
    if metrics.low_stock:
        for p in metrics.low_stock:
            st.write(f"**{p.name}** — {p.stock} left (threshold {p.low_stock_threshold})")
    else:
        st.caption("All products are well stocked.")
