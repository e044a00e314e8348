"""Unit tests for the collection renderers."""

import pytest

from portfolioview.dom import Element
from portfolioview.loader import CollectionLoader
from portfolioview.renderers import (
    CapabilityRenderer,
    CertificationRenderer,
    ExperienceRenderer,
    KPIRenderer,
    ProjectRenderer,
    SkillRenderer,
    create_renderer,
    project_actions,
    render_details,
)
from portfolioview.renderers.controls import render_chips, render_options
from portfolioview.renderers.experience import details_annotation
from portfolioview.renderers.projects import status_slug
from portfolioview.schemas.content import ExperienceEntry, Project
from tests.fixtures import DATA_DIR


@pytest.fixture
def loader():
    return CollectionLoader(DATA_DIR)


@pytest.fixture
def container():
    return Element("div")


class TestProjectRenderer:
    """Tests for project cards."""

    def test_one_card_per_record(self, loader, container):
        projects = loader.load("projects").records
        assert ProjectRenderer(container).render(projects) == 4
        assert len(container.element_children) == 4

    def test_empty_render_has_no_children(self, container):
        renderer = ProjectRenderer(container)
        renderer.render([Project(title="A")])
        assert renderer.render([]) == 0
        assert container.element_children == []

    def test_featured_first_then_title(self, loader, container):
        ProjectRenderer(container).render(loader.load("projects").records)
        titles = [card.query_selector("h3").text_content for card in container.element_children]
        assert titles == [
            "Serverless Resume API",
            "Cloud Cost Dashboard",
            "Homelab Kubernetes",
            "Incident Runbooks",
        ]
        assert "is-featured" in container.element_children[0].class_list

    def test_record_text_is_escaped(self, container):
        project = Project(title="<script>x</script>", description='"quoted" & <b>bold</b>')
        ProjectRenderer(container).render([project])
        card = container.element_children[0]
        assert card.query_selector("script") is None
        assert card.query_selector("h3").text_content == "<script>x</script>"
        assert card.query_selector("p").text_content == '"quoted" & <b>bold</b>'

    def test_script_href_neutralised(self, container):
        project = Project.model_validate(
            {"title": "A", "links": {"caseStudy": "javascript:alert(1)", "github": "javascript:alert(2)"}}
        )
        ProjectRenderer(container).render([project])
        card = container.element_children[0]
        assert card.get_attribute("data-href") == "#"
        assert card.query_selector("a").get_attribute("href") == "#"

    def test_only_navigable_cards_are_clickable(self, loader, container):
        ProjectRenderer(container).render(loader.load("projects").records)
        clickable = {c.query_selector("h3").text_content: c.get_attribute("data-href") for c in container.query_selector_all("[data-href]")}
        assert clickable == {
            "Serverless Resume API": "projects/resume-api.html",
            "Homelab Kubernetes": "projects/homelab.html",
            "Incident Runbooks": "https://blog.example.com/runbooks",
        }
        card = container.query_selector("[data-href]")
        assert card.get_attribute("role") == "link"
        assert card.get_attribute("tabindex") == "0"
        assert card.get_attribute("aria-label") == "Open Serverless Resume API"

    def test_placeholders_for_missing_fields(self, container):
        ProjectRenderer(container, placeholder="n/a").render([Project(title="Bare")])
        card = container.element_children[0]
        assert card.query_selector("p").text_content == "n/a"
        assert "Focus: n/a" in card.query_selector(".meta").text_content
        assert card.query_selector(".card-actions").element_children == []

    def test_tools_include_aws_services(self, loader, container):
        ProjectRenderer(container).render(loader.load("projects").records[:1])
        meta = container.query_selector(".meta").text_content
        assert "Tools: Lambda, DynamoDB, API Gateway" in meta

    def test_status_badge(self, loader, container):
        ProjectRenderer(container).render(loader.load("projects").records)
        badge = container.query_selector(".status-in-progress")
        assert badge is not None
        assert badge.text_content == "in progress"

    def test_count_shows_rendered_records(self, container):
        count = Element("span")
        ProjectRenderer(container, count=count).render([Project(title="A"), Project(title="B")])
        assert count.text_content == "2"

    def test_render_error(self, container):
        count = Element("span")
        renderer = ProjectRenderer(container, count=count)
        renderer.render([Project(title="A")])
        renderer.render_error("Failed to load <projects.json> (404)")

        assert len(container.element_children) == 1
        card = container.element_children[0]
        assert "error-card" in card.class_list
        assert card.get_attribute("role") == "alert"
        assert "<projects.json>" in card.text_content
        assert count.text_content == "0"


class TestProjectActions:
    """Tests for action buttons."""

    def test_ordered_actions(self, loader):
        actions = project_actions(loader.load("projects").records[0])
        assert [(a.label, a.importance) for a in actions] == [
            ("GitHub", "ghost"),
            ("Live", "primary"),
            ("Case Study", "ghost"),
        ]

    def test_writeup_shown_as_case_study(self):
        project = Project.model_validate({"title": "A", "links": {"writeup": "w.html"}})
        assert [(a.label, a.target) for a in project_actions(project)] == [("Case Study", "w.html")]

    def test_build_guide_is_internal(self, container):
        project = Project.model_validate({"title": "A", "links": {"buildGuide": "g.html", "blog": "b.html"}})
        actions = project_actions(project)
        assert [(a.label, a.external) for a in actions] == [("Blog", True), ("Build Guide", False)]

        ProjectRenderer(container).render([project])
        anchors = container.query_selector_all(".card-actions a")
        assert anchors[0].get_attribute("target") == "_blank"
        assert anchors[0].get_attribute("rel") == "noreferrer"
        assert anchors[1].get_attribute("target") is None

    @pytest.mark.parametrize(
        "status, slug",
        [("live", "live"), ("In Progress", "in-progress"), ("  beta / v2 ", "beta-v2"), ("???", "unknown")],
    )
    def test_status_slug(self, status, slug):
        assert status_slug(status) == slug


class TestExperienceRenderer:
    """Tests for the timeline."""

    def test_details_buttons_carry_source_position(self, loader):
        entries = loader.load("experience").records
        timeline = Element("ol")
        renderer = ExperienceRenderer(timeline, entries=entries)

        # Rendering only the second entry still points at its source position
        renderer.render(entries[1:])

        button = timeline.query_selector("[data-experience-index]")
        assert button.get_attribute("data-experience-index") == "1"
        assert renderer.entry_at(1) is entries[1]
        assert renderer.entry_at(5) is None

    def test_timeline_items(self, loader):
        timeline = Element("ol")
        ExperienceRenderer(timeline, entries=loader.load("experience").records).render(
            loader.load("experience").records
        )
        items = timeline.query_selector_all("li.timeline-item")
        assert len(items) == 2
        assert items[0].query_selector(".role").text_content == "Cloud Engineer"
        assert [t.text_content for t in items[0].query_selector_all(".domain")] == ["Platform", "Security"]


class TestRenderDetails:
    """Tests for the detail body."""

    def test_configured_sections_first_with_placeholders(self):
        entry = ExperienceEntry.model_validate(
            {
                "title": "Acme",
                "details": {"On-call": ["Pager"], "Responsibilities": ["Build & run"]},
            }
        )
        root = Element("div")
        root.inner_html = render_details(entry)

        headings = [h.text_content for h in root.query_selector_all("h4")]
        assert headings == ["Responsibilities", "Architecture highlights", "Outcomes", "On-call"]
        assert root.query_selector("li").text_content == "Build & run"
        assert len(root.query_selector_all(".detail-empty")) == 2

    def test_custom_sections_and_placeholder(self):
        entry = ExperienceEntry(title="Acme")
        root = Element("div")
        root.inner_html = render_details(entry, ["Summary"], placeholder="None listed")
        assert root.query_selector("h4").text_content == "Summary"
        assert root.query_selector(".detail-empty").text_content == "None listed"

    def test_annotation(self):
        assert details_annotation(ExperienceEntry(title="A", role="SRE", when="2020")) == "SRE · 2020"
        assert details_annotation(ExperienceEntry(title="A", when="2020")) == "2020"
        assert details_annotation(ExperienceEntry(title="A")) is None


class TestAuxiliaryRenderers:
    """Tests for KPI, capability, skill and certification renderers."""

    def test_kpis(self, loader, container):
        KPIRenderer(container).render(loader.load("kpis").records)
        values = [el.text_content for el in container.query_selector_all(".kpi-value")]
        notes = [el.text_content for el in container.query_selector_all(".kpi-note")]
        assert values == ["12", "4"]
        assert notes == ["since 2021", "—"]

    def test_capabilities_empty_items_use_placeholder(self, loader, container):
        CapabilityRenderer(container).render(loader.load("capabilities").records)
        second = container.element_children[1]
        assert second.query_selector("ul") is None
        assert second.query_selector_all("p")[-1].text_content == "—"

    def test_skills(self, loader, container):
        SkillRenderer(container).render(loader.load("skills").records)
        assert [h.text_content for h in container.query_selector_all("h3")] == ["Cloud", "Languages"]
        assert len(container.query_selector_all(".tag")) == 4

    def test_certifications_link_only_when_url(self, loader, container):
        CertificationRenderer(container).render(loader.load("certs").records)
        cards = container.element_children
        assert cards[0].query_selector("a").get_attribute("href") == "https://aws.amazon.com/certification/"
        assert cards[1].query_selector("a") is None
        assert cards[1].query_selector("p").text_content == "CNCF · —"


class TestControls:
    """Tests for facet chips and select options."""

    def test_chips_mark_active(self, container):
        render_chips(container, ("All", "AWS", "<x>"), "AWS")
        chips = container.element_children
        assert [c.get_attribute("data-facet") for c in chips] == ["All", "AWS", "<x>"]
        assert [c.get_attribute("aria-pressed") for c in chips] == ["false", "true", "false"]

    def test_options_mark_selected(self):
        select = Element("select")
        render_options(select, ("All", "AWS"), "AWS")
        options = select.element_children
        assert [o.get_attribute("value") for o in options] == ["All", "AWS"]
        assert options[1].has_attribute("selected")
        assert not options[0].has_attribute("selected")
        assert select.value == "AWS"


def test_create_renderer(container):
    assert isinstance(create_renderer("kpis", container), KPIRenderer)
    with pytest.raises(KeyError):
        create_renderer("unknown", container)
