import pytest

from services.frontmatter import FrontmatterError, parse_post, parse_project, split_frontmatter

POST = """---
title: Hello
publishedAt: 2024-06-03
summary: First post
tier: nebula-nomad
---

Body text.
"""


def test_parse_post_reads_metadata_and_body():
    post = parse_post(POST, "hello")
    assert post.slug == "hello"
    assert post.metadata.title == "Hello"
    assert post.metadata.published_at == "2024-06-03"
    assert post.metadata.tier == "nebula-nomad"
    assert post.required_tier == "nebula-nomad"
    assert post.is_paid
    assert post.content == "Body text."
    assert post.source == "local"


def test_post_without_tier_is_free():
    post = parse_post(POST.replace("tier: nebula-nomad\n", ""), "hello")
    assert post.required_tier is None
    assert not post.is_paid


def test_paid_flag_without_tier():
    post = parse_post(POST.replace("tier: nebula-nomad", "paid: true"), "hello")
    assert post.is_paid
    assert post.required_tier is None


def test_split_frontmatter_handles_bom_and_crlf():
    text = "\ufeff---\r\ntitle: X\r\n---\r\nbody"
    data, body = split_frontmatter(text)
    assert data == {"title": "X"}
    assert body == "body"


def test_missing_block_raises():
    with pytest.raises(FrontmatterError) as exc:
        parse_post("no frontmatter here", "x")
    assert "missing frontmatter" in str(exc.value)


def test_invalid_yaml_raises():
    with pytest.raises(FrontmatterError) as exc:
        parse_post("---\ntitle: [unclosed\n---\nbody", "x")
    assert "invalid YAML" in exc.value.message


def test_non_mapping_frontmatter_raises():
    with pytest.raises(FrontmatterError):
        parse_post("---\n- a\n- b\n---\nbody", "x")


def test_missing_required_field_names_the_problem():
    with pytest.raises(FrontmatterError) as exc:
        parse_post("---\ntitle: X\npublishedAt: 2024-01-01\n---\nbody", "x")
    assert "summary" in exc.value.message
    assert exc.value.source == "x"


def test_impossible_date_rejected():
    with pytest.raises(FrontmatterError) as exc:
        parse_post("---\ntitle: X\npublishedAt: '2024-13-45'\nsummary: s\n---\nb", "x")
    assert "publishedAt" in exc.value.message


def test_odd_tier_id_still_parses():
    post = parse_post(POST.replace("nebula-nomad", "Nebula-Nomad"), "x")
    assert post.required_tier == "Nebula-Nomad"


def test_empty_tier_means_free():
    post = parse_post(POST.replace("tier: nebula-nomad", "tier: \"\""), "x")
    assert post.required_tier is None
    assert not post.is_paid


def test_overlong_tier_id_rejected():
    with pytest.raises(FrontmatterError):
        parse_post(POST.replace("nebula-nomad", "x" * 65), "x")


def test_parse_project_reads_optional_fields():
    text = """---
title: Widget
publishedAt: 2024-03-01T10:00:00Z
description: A widget
tags: [python, flask]
status: archived
featured: true
repo: https://github.com/me/widget
---
Notes.
"""
    project = parse_project(text, "widget", source="remote")
    assert project.metadata.tags == ("python", "flask")
    assert project.metadata.status == "archived"
    assert project.metadata.featured is True
    assert project.metadata.repo == "https://github.com/me/widget"
    assert project.source == "remote"


def test_project_status_outside_allow_list_rejected():
    with pytest.raises(FrontmatterError):
        parse_project("---\ntitle: W\npublishedAt: 2024-01-01\nstatus: dead\n---\n", "w")
