import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resume_optimizer.heuristics.resume_parser import (  # noqa: E402
    get_default_resume_parser,
    parse_resume_heuristically,
)

SAMPLE_RESUME = (
    "Experienced Software Engineer\njohn@x.com\n555-123-4567\nEXPERIENCE\n"
    "- Led team of 5, increased revenue by 20%\nEDUCATION\nBS Computer Science, MIT\n"
    "SKILLS\nPython, AWS, Docker"
)


class HeuristicResumeParserTests(unittest.TestCase):
    def test_sample_resume_sections(self):
        parsed = parse_resume_heuristically(SAMPLE_RESUME)

        self.assertEqual(len(parsed.experience), 1)
        bullets = parsed.experience[0].bullets
        self.assertEqual(len(bullets), 1)
        self.assertIn("Led", bullets[0])
        self.assertIn("20%", bullets[0])
        self.assertEqual(parsed.education[0].institution, "BS Computer Science, MIT")
        self.assertEqual(parsed.skills, ["Python", "AWS", "Docker"])
        self.assertEqual(parsed.profile.email, "john@x.com")
        self.assertEqual(parsed.profile.phone, "555-123-4567")
        self.assertEqual(parsed.profile.name, "")

    def test_empty_text_yields_all_collections(self):
        parsed = parse_resume_heuristically("")
        dumped = parsed.model_dump()
        for key in ("experience", "education", "skills", "projects"):
            self.assertEqual(dumped[key], [])
        self.assertEqual(dumped["profile"]["email"], "")

    def test_inline_header_content_and_label_prefixes(self):
        text = "Skills: Python, SQL | Docker\nLanguages: Go; Rust\nEducation\nState University"
        parsed = parse_resume_heuristically(text)
        self.assertEqual(parsed.skills, ["Python", "SQL", "Docker", "Go", "Rust"])
        self.assertEqual(parsed.education[0].institution, "State University")

    def test_job_title_lines_are_not_mistaken_for_headers(self):
        text = (
            "Work Experience\n"
            "Project Manager at Acme Inc\n"
            "- Delivered roadmap for 3 products\n"
            "Technical Skills\n"
            "Jira, Confluence"
        )
        parsed = parse_resume_heuristically(text)
        self.assertEqual(parsed.projects, [])
        entry = parsed.experience[0]
        self.assertEqual(entry.title, "Project Manager at Acme Inc")
        self.assertEqual(entry.company, "Project Manager at Acme Inc")
        self.assertIn("Delivered roadmap for 3 products", entry.bullets)
        self.assertEqual(parsed.skills, ["Jira", "Confluence"])

    def test_contact_lines_are_not_bullets(self):
        text = (
            "Experience\n"
            "Reach me at john@example.com for references\n"
            "- Migrated billing to event sourcing"
        )
        parsed = parse_resume_heuristically(text)
        self.assertEqual(parsed.experience[0].bullets, ["Migrated billing to event sourcing"])

    def test_bullets_are_capped(self):
        lines = "\n".join(f"- Shipped feature number {index} to production" for index in range(20))
        parsed = parse_resume_heuristically(f"Experience\n{lines}")
        self.assertEqual(len(parsed.experience[0].bullets), 8)

    def test_short_glyph_lines_are_dropped(self):
        parsed = parse_resume_heuristically("Experience\n- Coding\n- Built an internal search service")
        self.assertEqual(parsed.experience[0].bullets, ["Built an internal search service"])

    def test_projects_section_is_aggregated(self):
        text = (
            "Projects\n"
            "- Built a CLI that syncs dotfiles across machines\n"
            "• Wrote a static site generator in Rust"
        )
        parsed = parse_resume_heuristically(text)
        self.assertEqual(len(parsed.projects), 1)
        self.assertEqual(len(parsed.projects[0].bullets), 2)
        self.assertEqual(parsed.experience, [])

    def test_experience_without_bullets_is_omitted(self):
        parsed = parse_resume_heuristically("Experience\nAcme\nEducation\nMIT")
        self.assertEqual(parsed.experience, [])

    def test_header_detection(self):
        parser = get_default_resume_parser()
        self.assertEqual(parser.header_section("PROFESSIONAL EXPERIENCE"), ("experience", ""))
        self.assertEqual(parser.header_section("Skills: Python"), ("skills", "Python"))
        self.assertIsNone(parser.header_section("- Experience with Kubernetes"))
        self.assertIsNone(parser.header_section("Experienced Software Engineer"))
        self.assertIsNone(
            parser.header_section("Gained deep experience across five product teams in fintech")
        )


if __name__ == "__main__":
    unittest.main()
