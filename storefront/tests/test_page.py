from storefront.ui.page import Element, build_page


def test_build_page_exposes_all_handles():
    page = build_page(hero_height=320)
    assert page.navbar.matches(".navbar")
    assert page.search_box.matches("#search-bar")
    assert page.container.matches(".products")
    assert page.hero.client_height == 320
    assert page.root.find(".products") is page.container


def test_to_html_escapes_text_and_attributes():
    el = Element("img", classes=["card-img-top"], attrs={"src": 'x" onerror="alert(1)'})
    assert el.to_html() == '<img src="x&quot; onerror=&quot;alert(1)" class="card-img-top">'

    p = Element("p", text="Tom & <Jerry>")
    assert p.to_html() == "<p>Tom &amp; &lt;Jerry&gt;</p>"


def test_style_is_rendered_inline():
    nav = Element("nav", style={"background-color": "rgba(0,0,0,0.5)"})
    assert nav.to_html() == '<nav style="background-color: rgba(0,0,0,0.5)"></nav>'


def test_remove_uses_identity():
    parent = Element("div")
    a, b = Element("span", text="same"), Element("span", text="same")
    parent.append(a, b)
    parent.remove(b)
    assert parent.children == [a]
    assert parent.children[0] is a
