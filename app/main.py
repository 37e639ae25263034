import streamlit as st

from storefront.catalog import CatalogStore, run_fetch_all
from storefront.config import configure_logging, load_settings
from storefront.domain import ProductType
from storefront.products import discount_percent, format_inr, variant_fields
from storefront.service import CatalogService, StorefrontSession
from storefront.transforms import by_tag, by_type


# ============ Data ============
@st.cache_data(ttl=60)
def get_products():
    settings = load_settings()
    configure_logging(settings.log_level)
    store = CatalogStore.from_url(settings.database_url, echo=settings.database_echo)
    return run_fetch_all(store)


st.set_page_config(
    page_title="Digisure",
    page_icon="🛒",
    layout="wide",
)

catalog = CatalogService(get_products())

# one session object per browser session
if "storefront" not in st.session_state:
    st.session_state.storefront = StorefrontSession()

session: StorefrontSession = st.session_state.storefront

LISTINGS = {
    ProductType.COURSE: (
        "Online Courses",
        "Upgrade your skills with video courses from top instructors.",
    ),
    ProductType.ACADEMIC: (
        "Academic Resources",
        "Study notes, question banks, and past papers for Schools & Competitive Exams.",
    ),
    ProductType.DOWNLOAD: (
        "Digital Downloads",
        "Templates, eBooks, and Software to accelerate your work.",
    ),
}

PAGES = ["🏠 Home", "🎓 Courses", "📚 Academic", "💾 Downloads", "🛒 Cart"]
PAGE_TYPES = {
    "🎓 Courses": ProductType.COURSE,
    "📚 Academic": ProductType.ACADEMIC,
    "💾 Downloads": ProductType.DOWNLOAD,
}

route = session.consume_navigation()
if route == "/cart":
    st.session_state.page = "🛒 Cart"


# ============ Helpers ============
def describe(product) -> str:
    details = variant_fields(product)
    return " · ".join(str(v) for v in details.values())


def product_card(product, key_prefix: str):
    with st.container(border=True):
        st.image(product.thumbnail, use_container_width=True)
        st.markdown(f"**{product.title}**")
        st.caption(f"by {product.author} · ⭐ {product.rating} ({product.reviews_count})")
        st.caption(describe(product))

        price = format_inr(product.price)
        off = discount_percent(product)
        if off:
            st.markdown(f"**{price}** ~~{format_inr(product.original_price)}~~ · {off}% off")
        else:
            st.markdown(f"**{price}**")

        if st.button("Add to Cart", key=f"{key_prefix}_{product.id}"):
            session.add(product)
            st.rerun()


def product_grid(products, key_prefix: str):
    if not products:
        st.info("Nothing here yet.")
        return
    cols = st.columns(3)
    for idx, product in enumerate(products):
        with cols[idx % 3]:
            product_card(product, key_prefix)


def cart_notification():
    product = session.notification.get_or_else(None)
    if product is None:
        return

    with st.sidebar:
        st.success("Added to Cart", icon="✅")
        st.markdown(f"**{product.title}**")
        st.write(format_inr(product.price))
        col1, col2 = st.columns(2)
        with col1:
            if st.button("Keep Shopping", key="notify_dismiss"):
                session.dismiss_notification()
                st.rerun()
        with col2:
            if st.button("Checkout Now", key="notify_checkout", type="primary"):
                session.proceed_to_checkout()
                st.rerun()


# ============ Navigation ============
with st.sidebar:
    st.header("Digisure")
    page = st.radio("Navigate", PAGES, key="page", label_visibility="collapsed")
    st.caption(f"🛒 {len(session.items)} in cart · {format_inr(session.total())}")

cart_notification()


# ============ PAGES ============
if page == "🏠 Home":
    st.title("Learn, build and grow")
    st.caption("Courses, downloads and academic resources, made for India.")
    for product_type, (title, _) in LISTINGS.items():
        st.subheader(title)
        product_grid(catalog.by_type(product_type)[:3], f"home_{product_type.value}")

elif page in PAGE_TYPES:
    product_type = PAGE_TYPES[page]
    title, subtitle = LISTINGS[product_type]
    st.header(title)
    st.caption(subtitle)

    all_tags = sorted({t for p in catalog.by_type(product_type) for t in p.tags})
    tag = st.selectbox("Tag", ["All"] + all_tags, key=f"tag_{product_type.value}")

    if tag == "All":
        products = catalog.by_type(product_type)
    else:
        of_type = by_type(product_type)
        has_tag = by_tag(tag)
        products = catalog.filter_products(lambda p: of_type(p) and has_tag(p))
    product_grid(products, f"list_{product_type.value}")

elif page == "🛒 Cart":
    st.header("Your Cart")

    if not session.items:
        st.info("Your cart is empty. Browse the catalog!")
    else:
        for item in session.items:
            cols = st.columns([6, 2, 1])
            with cols[0]:
                st.write(f"**{item.product.title}**")
                st.caption(item.product.type.value.title())
            with cols[1]:
                st.write(format_inr(item.price))
            with cols[2]:
                if st.button("🗑️", key=f"remove_{item.cart_id}"):
                    session.remove(item.cart_id)
                    st.rerun()

        st.divider()
        st.markdown(f"### Total: **{format_inr(session.total())}**")

        if st.button("Place Order", type="primary", use_container_width=True):
            result = session.place_order()
            if result.is_right:
                order = result.value
                st.success(f"🎉 Order {order.id} placed! Total: {format_inr(order.total)}")
                st.balloons()
            else:
                st.error(f"❌ {result.value['error']}")
