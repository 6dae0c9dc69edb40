"""
Prompt templates for tailoring a resume to a job description.
"""

SYSTEM_PROMPT = (
    "You are an expert resume writer. Your task is to analyze, edit, and generate a resume "
    "optimized for ATS (Applicant Tracking Systems) and recruiters. Ensure proper formatting, "
    "keyword usage, and alignment with the given job description. Only return the final "
    "formatted resume in markdown format without commentary, explanations, or summaries. "
    "Do not include any extra text before or after the resume. If any links are included "
    "(e.g. portfolio, LinkedIn, GitHub, or project URLs), make sure they are properly "
    "formatted as markdown hyperlinks like [LinkedIn](https://linkedin.com/in/yourname)."
)

USER_PROMPT_TEMPLATE = (
    "Here is my current resume:\n{current_resume}\n\n"
    "Here is the job description:\n{job_description}\n\n"
    "Please optimize my resume accordingly."
)


def build_user_prompt(current_resume: str, job_description: str) -> str:
    return USER_PROMPT_TEMPLATE.format(
        current_resume=current_resume, job_description=job_description
    )
