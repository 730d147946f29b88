"""
Prompt templates for structured completions.

Rendered to plain strings before being sent through the AI gateway's
complete operation together with the target schema.

Dependencies: langchain_core.prompts
System role: Prompt templates for profile, summary, job posting, and interview analysis
"""

from langchain_core.prompts import PromptTemplate

PROFILE_EXTRACTION_PROMPT = PromptTemplate.from_template(
    """You are an experienced technical recruiter reviewing a resume.

## Instructions
1. Write a 2-3 sentence professional summary of the candidate
2. List the concrete skills, tools, and technologies the candidate has used
3. Identify the most recent job title
4. Classify overall experience as one of: entry, junior, mid, senior, lead, executive
5. Give the candidate's location as written, or "Remote" if only remote work is mentioned
6. Leave a field empty rather than guessing

Resume:
{resume_text}"""
)

SUMMARY_PROMPT = PromptTemplate.from_template(
    """Summarize this resume in 2-3 sentences for a recruiter. Focus on role,
seniority, and strongest skills.

Resume:
{resume_text}"""
)

JOB_POSTING_PROMPT = PromptTemplate.from_template(
    """{title}

{description}

Required skills: {skills}
Location: {location}
Experience level: {experience}"""
)

INTERVIEW_ANALYSIS_PROMPT = PromptTemplate.from_template(
    """You are assessing a recorded candidate interview from its transcript.

## Instructions
1. Rate communication clarity from 0 to 10
2. Rate technical depth from 0 to 10
3. List the candidate's main strengths and concerns (short phrases)
4. Write a 2-3 sentence overall assessment
5. Base every judgement only on the transcript

Role context: {role_context}

Transcript:
{transcript}"""
)


def render_profile_extraction(resume_text: str) -> str:
    """Render the full-profile extraction prompt."""
    return PROFILE_EXTRACTION_PROMPT.format(resume_text=resume_text)


def render_summary(resume_text: str) -> str:
    """Render the summary-only fallback prompt."""
    return SUMMARY_PROMPT.format(resume_text=resume_text)


def render_job_posting(
    title: str,
    description: str,
    skills: list[str],
    location: str | None = None,
    experience: str | None = None,
) -> str:
    """Render the text embedded for a job posting."""
    return JOB_POSTING_PROMPT.format(
        title=title,
        description=description,
        skills=", ".join(skills) or "not specified",
        location=location or "not specified",
        experience=experience or "not specified",
    ).strip()


def render_interview_analysis(transcript: str, role_context: str | None = None) -> str:
    """Render the interview transcript analysis prompt."""
    return INTERVIEW_ANALYSIS_PROMPT.format(
        transcript=transcript,
        role_context=role_context or "not provided",
    )
