import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resume_optimizer.heuristics.ats_score import get_default_ats_estimator  # noqa: E402
from resume_optimizer.heuristics.job_analyzer import analyze_job_heuristically  # noqa: E402
from resume_optimizer.heuristics.resume_parser import parse_resume_heuristically  # noqa: E402
from resume_optimizer.schemas.job import JobRequirements, ParsedJobDescription  # noqa: E402
from resume_optimizer.schemas.resume import EducationEntry, ExperienceEntry, ParsedResume  # noqa: E402

SAMPLE_RESUME = (
    "Experienced Software Engineer\njohn@x.com\n555-123-4567\nEXPERIENCE\n"
    "- Led team of 5, increased revenue by 20%\nEDUCATION\nBS Computer Science, MIT\n"
    "SKILLS\nPython, AWS, Docker"
)


def _points(result, rule: str) -> int:
    for contribution in result.contributions:
        if contribution.rule == rule:
            return contribution.points
    raise AssertionError(f"rule not found: {rule}")


class GeneralScoreTests(unittest.TestCase):
    def setUp(self):
        self.estimator = get_default_ats_estimator()

    def test_sample_resume_scores_at_least_sixty(self):
        parsed = parse_resume_heuristically(SAMPLE_RESUME)
        result = self.estimator.score(parsed, SAMPLE_RESUME)

        self.assertEqual(result.mode, "general")
        self.assertEqual(result.source, "heuristic")
        self.assertGreaterEqual(result.score, 60)
        self.assertEqual(_points(result, "experience_section"), 15)
        self.assertEqual(_points(result, "education_section"), 10)
        self.assertEqual(_points(result, "skills_section"), 10)
        self.assertEqual(_points(result, "bullet_lines"), 2)
        self.assertEqual(_points(result, "metrics"), 4)
        self.assertEqual(_points(result, "action_verbs"), 2)
        self.assertEqual(_points(result, "tech_keywords"), 6)
        self.assertEqual(_points(result, "email"), 5)
        self.assertEqual(_points(result, "phone"), 5)
        self.assertEqual(_points(result, "length"), -10)
        self.assertEqual(result.score, 69)

    def test_empty_input_scores_the_floor(self):
        parsed = parse_resume_heuristically("")
        result = self.estimator.score(parsed, "")
        self.assertEqual(result.score, 20)

    def test_contact_numbers_are_not_counted_as_metrics(self):
        parsed = ParsedResume()
        result = self.estimator.score_general(parsed, "jane@site99.com\n+1 555 222 1111")
        self.assertEqual(_points(result, "metrics"), 0)
        self.assertEqual(_points(result, "phone"), 5)

    def test_each_rule_is_bounded_and_score_stays_in_range(self):
        bullets = "\n".join(
            f"- Led and optimized {index} React, Python and AWS API migrations saving ${index}k"
            for index in range(60)
        )
        text = f"jane@example.com\n555 222 1111\nExperience\n{bullets}\nEducation\nMIT\nSkills\nSQL"
        parsed = parse_resume_heuristically(text)
        result = self.estimator.score(parsed, text)

        self.assertLessEqual(result.score, 100)
        self.assertGreaterEqual(result.score, 20)
        for contribution in result.contributions:
            self.assertLessEqual(contribution.points, contribution.max_points)
        self.assertEqual(_points(result, "bullet_lines"), 15)
        self.assertEqual(_points(result, "metrics"), 12)
        self.assertEqual(_points(result, "action_verbs"), 12)

    def test_structured_text_used_when_raw_text_missing(self):
        parsed = parse_resume_heuristically(SAMPLE_RESUME)
        result = self.estimator.score_general(parsed, "")
        self.assertEqual(_points(result, "experience_section"), 15)
        self.assertEqual(_points(result, "email"), 5)

    def test_improvements_reported_for_missing_sections(self):
        result = self.estimator.score_general(ParsedResume(), "Just a few words here")
        self.assertTrue(any("Experience" in item for item in result.improvements))


class JobScoreTests(unittest.TestCase):
    def setUp(self):
        self.estimator = get_default_ats_estimator()
        self.job_text = "Required: React, Node.js, AWS"
        self.job = analyze_job_heuristically(self.job_text)

    def test_two_of_three_required_skills(self):
        resume = ParsedResume(skills=["React", "AWS"])
        result = self.estimator.score(resume, "", job=self.job, job_text=self.job_text)

        self.assertEqual(result.mode, "job")
        self.assertEqual(_points(result, "skill_match"), 20)
        self.assertEqual(result.matching_keywords, ["react", "aws"])
        self.assertEqual(result.missing_keywords, ["node.js"])
        self.assertEqual(result.score, 70)

    def test_adding_required_skills_never_lowers_score(self):
        base_skills = ["React"]
        previous = self.estimator.score_for_job(ParsedResume(skills=base_skills), self.job).score
        for skill in ("Node.js", "AWS"):
            base_skills = [*base_skills, skill]
            current = self.estimator.score_for_job(ParsedResume(skills=base_skills), self.job).score
            self.assertGreaterEqual(current, previous)
            previous = current

    def test_skill_found_in_raw_text(self):
        resume = ParsedResume(skills=["React", "AWS"])
        result = self.estimator.score_for_job(resume, self.job, raw_text="Built Node.js services")
        self.assertEqual(_points(result, "skill_match"), 30)

    def test_job_without_listed_skills(self):
        job = ParsedJobDescription(title="Office Assistant")
        result = self.estimator.score_for_job(ParsedResume(), job)
        self.assertEqual(_points(result, "skill_match"), 15)

    def test_experience_relevance(self):
        job = ParsedJobDescription(title="Payments engineer", responsibilities=["Scale our payment platform"])
        relevant = ParsedResume(experience=[ExperienceEntry(bullets=["Built payment services for retailers"])])
        unrelated = ParsedResume(experience=[ExperienceEntry(bullets=["Taught high school chemistry"])])

        self.assertEqual(_points(self.estimator.score_for_job(relevant, job), "experience_relevance"), 20)
        self.assertEqual(_points(self.estimator.score_for_job(unrelated, job), "experience_relevance"), 5)

    def test_education_match_mismatch_and_unknown(self):
        job = ParsedJobDescription(requirements=JobRequirements(education="Bachelor's degree or equivalent"))
        matched = ParsedResume(education=[EducationEntry(degree="Bachelor of Science", institution="State University")])
        mismatched = ParsedResume(education=[EducationEntry(institution="Springfield High School")])
        unknown_job = ParsedJobDescription(requirements=JobRequirements(education="Not specified"))

        self.assertEqual(_points(self.estimator.score_for_job(matched, job), "education_match"), 10)
        self.assertEqual(_points(self.estimator.score_for_job(mismatched, job), "education_match"), 3)
        self.assertEqual(_points(self.estimator.score_for_job(matched, unknown_job), "education_match"), 5)
        self.assertEqual(_points(self.estimator.score_for_job(ParsedResume(), job), "education_match"), 5)

    def test_score_stays_in_range(self):
        result = self.estimator.score_for_job(ParsedResume(), self.job)
        self.assertGreaterEqual(result.score, 0)
        self.assertLessEqual(result.score, 100)


class TailoredEstimateTests(unittest.TestCase):
    def test_keywords_and_changes_raise_the_estimate(self):
        estimator = get_default_ats_estimator()
        job = ParsedJobDescription(requirements=JobRequirements(required_skills=["Python", "AWS"]))
        score = estimator.estimate_tailored(
            job,
            ["Migrated Python services to AWS", "Improved Python test coverage"],
        )
        self.assertEqual(score, 70)

    def test_estimate_is_capped(self):
        estimator = get_default_ats_estimator()
        job = ParsedJobDescription(keywords=["python"] * 40)
        self.assertEqual(estimator.estimate_tailored(job, ["python"] * 10), 100)


if __name__ == "__main__":
    unittest.main()
