"""Tests for HTML export."""

from resume_studio.export.html_export import render_html


def test_user_text_is_escaped(make_resume):
    html = render_html(make_resume(personalInfo={"name": "<script>alert(1)</script>"}, summary="R&D <b>lead</b>"))
    assert "<script>" not in html
    assert "&lt;SCRIPT&gt;ALERT(1)&lt;/SCRIPT&gt;" in html
    assert "<title>&lt;script&gt;alert(1)&lt;/script&gt;</title>" in html
    assert "R&amp;D &lt;b&gt;lead&lt;/b&gt;" in html


def test_bullets_render_as_list_items(strong_resume):
    html = render_html(strong_resume)
    assert "<ul>" in html
    assert "<li>Mentored junior developers" in html
    assert "<h2>PROFESSIONAL EXPERIENCE</h2>" in html
    assert '<p class="contact">' in html


def test_html_export_is_deterministic(strong_resume):
    assert render_html(strong_resume) == render_html(strong_resume)
