import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resume_optimizer.heuristics.tech_equivalence import (  # noqa: E402
    TechStackEquivalenceMapper,
    map_tech_equivalents,
)


class TechStackEquivalenceTests(unittest.TestCase):
    def test_react_collects_members_of_every_matching_cluster(self):
        mapping = map_tech_equivalents(["React"])
        self.assertEqual(
            mapping["React"],
            ["JavaScript", "TypeScript", "Node.js", "Vue", "Angular", "Svelte", "Next.js"],
        )

    def test_one_spelling_per_technology(self):
        related = map_tech_equivalents(["React"])["React"]
        self.assertEqual(sum(1 for item in related if item.lower().startswith("vue")), 1)

    def test_suffixed_name_matches_the_base_spelling(self):
        mapping = map_tech_equivalents(["Vue.js"])
        self.assertEqual(
            mapping["Vue.js"],
            ["JavaScript", "TypeScript", "Node.js", "React", "Angular", "Svelte", "Next.js"],
        )

    def test_unknown_technology_maps_to_empty_list(self):
        self.assertEqual(map_tech_equivalents(["COBOL"]), {"COBOL": []})

    def test_java_does_not_match_javascript_cluster(self):
        mapping = map_tech_equivalents(["Java", "JavaScript"])
        self.assertEqual(mapping["Java"], ["Spring", "Spring Boot", "Hibernate", "Maven"])
        self.assertNotIn("Spring", mapping["JavaScript"])

    def test_composite_names_exclude_their_parts(self):
        mapping = map_tech_equivalents(["Spring Boot"])
        self.assertEqual(mapping["Spring Boot"], ["Java", "Hibernate", "Maven"])

    def test_never_maps_a_technology_to_itself(self):
        stack = [
            "JavaScript", "Python", "Java", "C#", "React", "PostgreSQL", "AWS", "Docker", "Git",
            "TypeScript", "Node.js", "Vue", "Angular", "Next.js", "Kubernetes", "GitHub", "MySQL",
        ]
        mapping = map_tech_equivalents(stack)
        for tech, related in mapping.items():
            lowered = [item.lower() for item in related]
            self.assertNotIn(tech.lower(), lowered)
            self.assertEqual(len(lowered), len(set(lowered)))

    def test_blank_entries_are_skipped(self):
        mapping = map_tech_equivalents(["", "  ", " Docker "])
        self.assertEqual(mapping, {"Docker": ["Kubernetes", "Podman", "containerd"]})

    def test_custom_clusters(self):
        mapper = TechStackEquivalenceMapper([("Terraform", "Pulumi", "CloudFormation")])
        self.assertEqual(mapper.map_equivalents(["pulumi"]), {"pulumi": ["Terraform", "CloudFormation"]})


if __name__ == "__main__":
    unittest.main()
