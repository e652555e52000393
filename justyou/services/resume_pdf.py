# justyou/services/resume_pdf.py
"""
Assemble resume content and render it as a LaTeX document.

Each template only changes colours, rule weights and the page background;
the section layout is shared. Compilation lives in latex_compiler.
"""
import re
from dataclasses import dataclass
from typing import Any, Dict, List

from justyou.models.resume import ResumeContent


@dataclass(frozen=True)
class TemplateStyle:
    name_color: str
    heading_color: str
    rule_pt: float
    page_color: str = "FFFFFF"


TEMPLATES: Dict[str, TemplateStyle] = {
    "classic": TemplateStyle(name_color="2C3E50", heading_color="2C3E50", rule_pt=0.4),
    "modern": TemplateStyle(name_color="3498DB", heading_color="3498DB", rule_pt=1.2),
    "professional": TemplateStyle(name_color="2C3E50", heading_color="2C3E50", rule_pt=0.6),
    "creative": TemplateStyle(name_color="E74C3C", heading_color="E74C3C", rule_pt=1.2, page_color="F8F9FA"),
    "minimal": TemplateStyle(name_color="000000", heading_color="000000", rule_pt=0.6),
}

_LATEX_SPECIALS = {
    "\\": r"\textbackslash{}",
    "&": r"\&",
    "%": r"\%",
    "$": r"\$",
    "#": r"\#",
    "_": r"\_",
    "{": r"\{",
    "}": r"\}",
    "~": r"\textasciitilde{}",
    "^": r"\textasciicircum{}",
}
_LATEX_RE = re.compile("|".join(re.escape(k) for k in _LATEX_SPECIALS))


class UnknownTemplateError(ValueError):
    pass


def escape_latex(text: Any) -> str:
    if text is None:
        return ""
    return _LATEX_RE.sub(lambda m: _LATEX_SPECIALS[m.group(0)], str(text))


def contact_line(info) -> str:
    parts = [p for p in (info.email, info.phone, info.location) if p]
    if info.linkedin:
        parts.append(f"LinkedIn: {info.linkedin}")
    if info.portfolio:
        parts.append(f"Portfolio: {info.portfolio}")
    return " | ".join(parts)


def assemble_content(request, jobs: List[Dict[str, Any]], projects: List[Dict[str, Any]], skills: List[Dict[str, Any]]) -> ResumeContent:
    """Build the document from the request and the user's *selected* stored records."""
    return ResumeContent(
        personalInfo=request.personalInfo,
        summary=request.summary,
        experience=[j for j in jobs if j.get("selected", True)],
        projects=[p for p in projects if p.get("selected", True)],
        skills=[s for s in skills if s.get("selected", True)],
        education=request.education,
        certifications=request.certifications,
    )


def _section(title: str, body: List[str]) -> List[str]:
    return [rf"\resumesection{{{title}}}", *body, ""]


def render_latex(content: ResumeContent, template: str = "classic") -> str:
    style = TEMPLATES.get(template)
    if style is None:
        raise UnknownTemplateError(f"Unknown template: {template}")
    e = escape_latex
    info = content.personalInfo

    lines = [
        r"\documentclass[10pt]{article}",
        r"\usepackage[a4paper,margin=1.1cm]{geometry}",
        r"\usepackage[T1]{fontenc}",
        r"\usepackage[utf8]{inputenc}",
        r"\usepackage{helvet}",
        r"\renewcommand{\familydefault}{\sfdefault}",
        r"\usepackage[table]{xcolor}",
        r"\usepackage{enumitem}",
        r"\setlist[itemize]{leftmargin=1.2em,itemsep=1pt,topsep=2pt}",
        r"\pagestyle{empty}",
        r"\setlength{\parindent}{0pt}",
        rf"\definecolor{{namecolor}}{{HTML}}{{{style.name_color}}}",
        rf"\definecolor{{headingcolor}}{{HTML}}{{{style.heading_color}}}",
        rf"\definecolor{{pagecolor}}{{HTML}}{{{style.page_color}}}",
        r"\pagecolor{pagecolor}",
        r"\newcommand{\resumesection}[1]{\vspace{6pt}{\large\bfseries\color{headingcolor}#1}\\[-6pt]"
        rf"{{\color{{headingcolor}}\rule{{\linewidth}}{{{style.rule_pt}pt}}}}\\[2pt]}}",
        r"\begin{document}",
        rf"{{\huge\bfseries\color{{namecolor}}{e(info.name)}}}\\[2pt]",
        rf"{{\small\color{{gray}}{e(contact_line(info))}}}",
        r"\vspace{4pt}",
        "",
    ]

    if content.summary:
        lines += _section("PROFESSIONAL SUMMARY", [e(content.summary)])

    if content.experience:
        body = []
        for job in content.experience:
            body.append(rf"\textbf{{{e(job.title)} at {e(job.company)}}}\\")
            body.append(rf"{{\small\color{{gray}}{e(job.startDate)} - {e(job.endDate)}}}")
            if job.bulletPoints:
                body.append(r"\begin{itemize}")
                body += [rf"\item {e(point)}" for point in job.bulletPoints]
                body.append(r"\end{itemize}")
            body.append(r"\vspace{4pt}")
        lines += _section("EXPERIENCE", body)

    if content.skills:
        lines += _section("SKILLS", [", ".join(f"{e(s.name)} ({e(s.category)})" for s in content.skills)])

    if content.projects:
        body = []
        for project in content.projects:
            body.append(rf"\textbf{{{e(project.name)}}}\\")
            body.append(rf"{{\small\color{{gray}}{e(project.technologies)} - {e(project.role)} ({e(project.duration)})}}\\")
            body.append(rf"{e(project.description)}\\[4pt]")
        lines += _section("PROJECTS", body)

    if content.education:
        body = []
        for edu in content.education:
            gpa = f" | GPA: {edu.gpa}" if edu.gpa else ""
            body.append(rf"\textbf{{{e(edu.degree)} - {e(edu.institution)}}}\\")
            body.append(rf"{{\small\color{{gray}}{e(edu.graduationDate + gpa)}}}\\")
            if edu.relevantCourses:
                body.append(rf"Relevant Courses: {e(edu.relevantCourses)}\\")
            body.append(r"\vspace{2pt}")
        lines += _section("EDUCATION", body)

    if content.certifications:
        body = []
        for cert in content.certifications:
            url = f" | {cert.url}" if cert.url else ""
            body.append(rf"\textbf{{{e(cert.name)} - {e(cert.issuer)}}}\\")
            body.append(rf"{{\small\color{{gray}}{e(cert.date + url)}}}\\[2pt]")
        lines += _section("CERTIFICATIONS", body)

    lines.append(r"\end{document}")
    return "\n".join(lines) + "\n"
