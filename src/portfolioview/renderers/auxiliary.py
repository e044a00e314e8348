"""Renderers for the unfiltered auxiliary collections."""

from portfolioview.renderers.base import BaseRenderer
from portfolioview.sanitizer import escape_html, safe_url
from portfolioview.schemas.content import KPI, Capability, Certification, SkillGroup


class KPIRenderer(BaseRenderer):
    collection = "kpis"
    error_title = "Could not load metrics"

    def render_record(self, kpi: KPI, index: int) -> str:
        return (
            '<div class="kpi">'
            f'<span class="kpi-value">{self.text(kpi.value)}</span>'
            f'<span class="kpi-label">{escape_html(kpi.label)}</span>'
            f'<span class="kpi-note muted">{self.text(kpi.note)}</span>'
            "</div>"
        )


class CapabilityRenderer(BaseRenderer):
    collection = "capabilities"
    error_title = "Could not load capabilities"

    def render_record(self, capability: Capability, index: int) -> str:
        return (
            '<article class="card capability">'
            f"<h3>{escape_html(capability.title)}</h3>"
            f"<p>{self.text(capability.description)}</p>"
            f"{self.bullet_list(capability.items)}"
            "</article>"
        )


class SkillRenderer(BaseRenderer):
    collection = "skills"
    error_title = "Could not load skills"

    def render_record(self, group: SkillGroup, index: int) -> str:
        return (
            '<article class="card skill-group">'
            f"<h3>{escape_html(group.group)}</h3>"
            f'<div class="tags">{self.chips(group.items)}</div>'
            "</article>"
        )


class CertificationRenderer(BaseRenderer):
    collection = "certs"
    error_title = "Could not load certifications"

    def render_record(self, cert: Certification, index: int) -> str:
        if cert.url.strip():
            name = (
                f'<a href="{safe_url(cert.url)}" target="_blank" rel="noreferrer">'
                f"{escape_html(cert.name)}</a>"
            )
        else:
            name = escape_html(cert.name)
        return (
            '<article class="card cert">'
            f"<h3>{name}</h3>"
            f'<p class="muted">{self.text(cert.issuer)} · {self.text(cert.year)}</p>'
            "</article>"
        )
