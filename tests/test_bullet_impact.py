import sys
import unittest
from dataclasses import replace
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resume_optimizer.heuristics.bullet_impact import (  # noqa: E402
    BulletImpactScorer,
    ImpactWeights,
    collect_memory_bullets,
    impact_score,
    select_relevant_bullets,
    skills_in_bullet,
)
from resume_optimizer.heuristics.resume_parser import parse_resume_heuristically  # noqa: E402
from resume_optimizer.schemas.resume import ParsedResume  # noqa: E402
from resume_optimizer.schemas.tailoring import MemoryBullet  # noqa: E402

SAMPLE_RESUME = (
    "Experienced Software Engineer\njohn@x.com\n555-123-4567\nEXPERIENCE\n"
    "- Led team of 5, increased revenue by 20%\nEDUCATION\nBS Computer Science, MIT\n"
    "SKILLS\nPython, AWS, Docker"
)


class ImpactScoreTests(unittest.TestCase):
    def test_all_signals(self):
        bullet = "Led migration of 12 services to a cloud platform, cutting deployment time from hours to minutes"
        self.assertEqual(impact_score(bullet), 8)

    def test_plain_bullet_scores_zero(self):
        self.assertEqual(impact_score("Responsible for office tasks"), 0)

    def test_action_verb_must_lead(self):
        self.assertEqual(impact_score("Team that I led"), 0)
        self.assertEqual(impact_score("led the team"), 2)

    def test_score_is_capped(self):
        weights = replace(ImpactWeights.from_scoring_config(), digit_points=9, action_points=9)
        scorer = BulletImpactScorer(weights)
        self.assertEqual(scorer.impact_score("Built 3 dashboards"), 10)


class MemoryBulletTests(unittest.TestCase):
    def test_skills_in_bullet(self):
        self.assertEqual(
            skills_in_bullet("Shipped a Python API on AWS Lambda", ["Python", "AWS", "Go", ""]),
            ["Python", "AWS"],
        )

    def test_collects_parsed_bullets(self):
        parsed = parse_resume_heuristically(SAMPLE_RESUME)
        bullets = collect_memory_bullets(parsed, SAMPLE_RESUME)
        self.assertEqual(len(bullets), 1)
        self.assertEqual(bullets[0].text, "Led team of 5, increased revenue by 20%")
        self.assertEqual(bullets[0].impact_score, 5)
        self.assertEqual(bullets[0].skills, [])

    def test_falls_back_to_sentence_fragments(self):
        text = (
            "Short line. Coordinated vendor onboarding for three regional offices; "
            "Reduced monthly cloud spend by 18 percent across teams. ok"
        )
        bullets = collect_memory_bullets(ParsedResume(), text)
        self.assertEqual(
            [bullet.text for bullet in bullets],
            [
                "Coordinated vendor onboarding for three regional offices",
                "Reduced monthly cloud spend by 18 percent across teams",
            ],
        )


class RelevantBulletTests(unittest.TestCase):
    def test_selects_by_skill_overlap_or_high_impact(self):
        bullets = [
            MemoryBullet(text="Answered phones", skills=[], impact_score=1),
            MemoryBullet(text="Built Python ETL", skills=["Python"], impact_score=4),
            MemoryBullet(text="Cut costs 40% with automation", skills=[], impact_score=8),
        ]
        selected = select_relevant_bullets(bullets, ["python", "AWS"])
        self.assertEqual([bullet.text for bullet in selected], ["Cut costs 40% with automation", "Built Python ETL"])

    def test_selection_is_capped(self):
        bullets = [MemoryBullet(text=f"Bullet {index}", impact_score=9) for index in range(8)]
        self.assertEqual(len(select_relevant_bullets(bullets, [])), 5)


if __name__ == "__main__":
    unittest.main()
