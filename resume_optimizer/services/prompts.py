from __future__ import annotations

import json
from typing import Any

VALIDATION_INPUT_CHARS = 2000
ATS_RAW_TEXT_CHARS = 4000
JOB_ATS_RAW_TEXT_CHARS = 3000

RESUME_VALIDATION_SYSTEM = """You are a resume validator. Analyze the given text and determine if it is a resume or CV.

A resume/CV typically contains:
- Personal contact information (name, email, phone)
- Work experience with job titles and companies
- Education information
- Skills section
- Professional summary or objective

Return ONLY a JSON object in this exact format:
{
  "is_resume": boolean,
  "reason": "string explaining why it is or isn't a resume"
}"""

RESUME_PARSE_SYSTEM = """You are a resume parser. Extract structured data from resume text and return ONLY valid JSON in this exact format:
{
  "profile": {"name": "string", "email": "string", "phone": "string", "location": "string", "summary": "string"},
  "experience": [
    {
      "company": "string",
      "title": "string",
      "location": "string",
      "start_date": "string",
      "end_date": "string",
      "bullets": ["string"],
      "skills": ["string"]
    }
  ],
  "education": [
    {"institution": "string", "degree": "string", "field": "string", "graduation_date": "string", "gpa": "string"}
  ],
  "skills": ["string"],
  "projects": [
    {"name": "string", "description": "string", "technologies": ["string"], "bullets": ["string"]}
  ]
}
Return only the JSON, no other text."""

GENERAL_ATS_SYSTEM = """You are an ATS (Applicant Tracking System) analyzer. Evaluate this resume and provide an ATS compatibility score from 0-100.

Consider these factors:
- Clear section headers (Experience, Education, Skills)
- Quantifiable achievements with metrics
- Relevant keywords and technical skills
- Professional formatting and structure
- Action verbs and impact statements
- Contact information completeness
- Education and experience details

Return ONLY a JSON object:
{
  "score": number (0-100),
  "strengths": ["string"],
  "improvements": ["string"]
}"""

JOB_ATS_SYSTEM = """You are an ATS (Applicant Tracking System) analyzer. Compare this resume against the specific job description and provide a compatibility score from 0-100.

Consider these factors:
- Keyword matching between resume and job requirements
- Relevant skills alignment with job tech stack
- Experience level matching job requirements
- Education requirements fulfillment
- Industry and domain experience relevance
- Technical skills overlap
- Years of experience alignment
- Job title and role progression match

Return ONLY a JSON object:
{
  "score": number (0-100),
  "matching_keywords": ["string"],
  "missing_keywords": ["string"],
  "strengths": ["string"],
  "improvements": ["string"]
}"""

JOB_ANALYSIS_SYSTEM = """You are a job description analyzer. Extract structured data and return ONLY valid JSON in this exact format:
{
  "title": "string",
  "company": "string",
  "location": "string",
  "requirements": {
    "required_skills": ["string"],
    "preferred_skills": ["string"],
    "experience_years": "string",
    "education": "string",
    "certifications": ["string"]
  },
  "responsibilities": ["string"],
  "keywords": ["string"],
  "tech_stack": ["string"],
  "industry": "string",
  "employment_type": "string",
  "salary_range": "string"
}

Focus on extracting:
- All technical skills and technologies mentioned
- Required vs preferred qualifications
- Key action words and industry terms
- Educational requirements
- Experience level needed

Return only the JSON, no other text."""

TAILOR_SYSTEM = """You are an expert resume tailoring AI. Your job is to rewrite resume bullets to be more ATS-friendly and job-specific while maintaining truthfulness.

RULES:
1. NEVER fabricate companies, dates, or responsibilities
2. Only enhance existing experiences with better wording
3. Tag any external suggestions with [SUGGESTED] and set "is_external" to true
4. Focus on keywords from the job description
5. Use strong action verbs and quantifiable metrics
6. Return changes in JSON diff format

Job Requirements: {requirements}
Tech Stack: {tech_stack}

Return ONLY valid JSON in this format:
{{
  "changes": [
    {{
      "section": "experience|projects|skills",
      "index": 0,
      "field": "bullets|title|description",
      "original": "original text",
      "suggested": "improved text",
      "reasoning": "why this change improves ATS score",
      "confidence": 0.85,
      "is_external": false
    }}
  ],
  "ats_improvements": {{
    "keyword_matches": 15,
    "estimated_score_increase": 25,
    "missing_keywords": ["keyword1", "keyword2"]
  }},
  "questions": []
}}"""

TAILOR_ASSISTIVE_SUFFIX = (
    "\n\nASK clarifying questions in \"questions\" if you need more context about specific "
    "experiences before making suggestions."
)

COVER_LETTER_SYSTEM = """You are an expert cover letter writer. Create a compelling, personalized cover letter that:
1. Demonstrates genuine interest in the specific company and role
2. Highlights relevant experience from the resume
3. Shows clear value proposition
4. Maintains professional yet engaging tone
5. Is concise (3-4 paragraphs maximum)

Format as a proper business letter with placeholders for [Company Name], [Hiring Manager], [Your Name], etc.
Do not fabricate specific details not present in the resume."""

LINKEDIN_SUMMARY_SYSTEM = """You are a LinkedIn profile optimization expert. Create a compelling LinkedIn summary that:
1. Starts with a strong hook
2. Highlights key achievements and skills
3. Shows personality and professional brand
4. Uses relevant keywords for SEO
5. Ends with a call to action
6. Is 3-5 sentences maximum
7. Written in first person

Make it engaging and professional while staying truthful to the resume content."""


def as_json(value: Any) -> str:
    if hasattr(value, "model_dump"):
        value = value.model_dump(mode="json")
    return json.dumps(value, ensure_ascii=False, indent=2)


def validation_user_prompt(text: str) -> str:
    return f"Analyze if this is a resume:\n\n{text[:VALIDATION_INPUT_CHARS]}"


def parse_user_prompt(text: str) -> str:
    return f"Parse this resume text:\n\n{text}"


def general_ats_user_prompt(resume: Any, raw_text: str) -> str:
    return (
        "Analyze this resume for ATS compatibility:\n\n"
        f"Structured Data: {as_json(resume)}\n\n"
        f"Raw Text (first {ATS_RAW_TEXT_CHARS} chars): {raw_text[:ATS_RAW_TEXT_CHARS]}"
    )


def job_ats_user_prompt(resume: Any, job: Any, raw_text: str) -> str:
    return (
        "Compare this resume against the job description:\n\n"
        f"JOB DESCRIPTION:\n{as_json(job)}\n\n"
        f"RESUME DATA:\n{as_json(resume)}\n\n"
        f"RAW RESUME TEXT:\n{raw_text[:JOB_ATS_RAW_TEXT_CHARS] or 'Not available'}"
    )


def job_analysis_user_prompt(job_text: str) -> str:
    return f"Analyze this job description:\n\n{job_text}"


def tailor_system_prompt(job: Any, mode: str, memory_bullets: list[Any]) -> str:
    prompt = TAILOR_SYSTEM.format(
        requirements=json.dumps(job.requirements.model_dump(mode="json"), ensure_ascii=False),
        tech_stack=json.dumps(job.tech_stack, ensure_ascii=False),
    )
    if mode == "assistive":
        prompt += TAILOR_ASSISTIVE_SUFFIX
    if memory_bullets:
        lines = "\n".join(f"- {bullet.text} (impact: {bullet.impact_score})" for bullet in memory_bullets)
        prompt += f"\n\nAdditional bullets from memory for inspiration (mark as [SUGGESTED]):\n{lines}"
    return prompt


def tailor_user_prompt(resume: Any, job_text: str) -> str:
    return f"Tailor this resume for the job:\n\nRESUME:\n{as_json(resume)}\n\nJOB DESCRIPTION:\n{job_text}"


def cover_letter_user_prompt(resume: Any, job: Any, job_text: str) -> str:
    heading = " at ".join(part for part in (job.title, job.company) if part)
    return (
        "Create a cover letter for this position:\n\n"
        f"JOB DESCRIPTION:\n{heading}\n{job_text}\n\n"
        f"RESUME:\n{as_json(resume)}"
    )


def linkedin_summary_user_prompt(resume: Any, job_text: str) -> str:
    return (
        f"Create a LinkedIn summary based on this resume:\n{as_json(resume)}\n\n"
        f"Target keywords from this job description:\n{job_text}"
    )
