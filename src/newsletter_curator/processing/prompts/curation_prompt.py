"""Prompt template for per-item story extraction."""

SMART_CURATION_PROMPT = """You are an expert AI news curator for the "Innov8 AI" newsletter.
Target Audience: Normal people interested in AI (not just researchers). They want to know "what happened" and "why it matters".

TASK: Analyze this content and extract individual news stories.

For EACH distinct news story, provide:
1. headline: Clear, engaging headline (max 12 words) - specific and punchy
2. summary: A 3-4 sentence explanation covering: WHAT happened? and WHY it matters to a normal person? Avoid jargon.
3. category: One of [model_release, tool_launch, acquisition, research, funding, regulation, tutorial, industry, company_news, other]
4. baseScore: Score 1-10 based on importance to the general public:
   - 9-10: Mainstream news (GPT-5, deepfakes law, major job market shifts)
   - 7-8: Big tools normal people use (ChatGPT updates, heavy hitters), major breakthroughs
   - 5-6: Interesting new apps, useful tutorials, industry trends
   - 3-4: Niche developer tools, minor updates, enterprise-only news
   - 1-2: Spam, irrelevant, promotional only
5. entities: List of companies/products mentioned
6. originalUrl: Source URL if mentioned

RULES:
- Extract SEPARATE stories, not the whole newsletter
- Focus on the "Normal Person" angle in the summary
- Skip: job posts, sponsor sections, "also check out" links
- Max 6 stories per source

Return ONLY valid JSON array. No other text."""

ITEM_PROMPT_TEMPLATE = """{instructions}

SOURCE: {source_name}
TITLE: {title}
DATE: {published_at}

CONTENT:
{content}

Return JSON array only."""


def build_curation_prompt(*, source_name: str, title: str, published_at: str, content: str) -> str:
    return ITEM_PROMPT_TEMPLATE.format(
        instructions=SMART_CURATION_PROMPT,
        source_name=source_name,
        title=title,
        published_at=published_at,
        content=content,
    )
