"""Prompt templates for the generation endpoints.

Templates are rendered with ``str.format``; literal braces in JSON examples
are doubled.
"""

from __future__ import annotations

NO_ANALYST_RULES = """
CRITICAL ADDITIONAL RULES:
- Do NOT mention analyst names, firm names, or specific ratings in headlines
- Focus on the business impact, market reaction, or investor implications
- Create original headlines that don't directly copy article content
""".strip()

CLEAN_HEADLINE_GUIDE = """
EXAMPLES OF GOOD HEADLINES:
- "New York's Office Boom Stands Alone As Most US Cities Stay Remote"
- "Tesla Faces Growing Competition In Electric Vehicle Market"
- "Federal Reserve Signals Potential Rate Cuts Ahead"

AVOID:
- Colons, dashes, or excessive punctuation
- Dramatic verbs like "sparks," "ignites," "plummets," "soars"
- Multiple data points crammed together
- Sensational or clickbait language
""".strip()

ADJUST_HEADLINE_TEMPLATE = """
You are a financial headline editor for a high-impact news site.

Your task is to revise an existing headline based on a specific instruction. Your edits should reflect the requested tweak **while preserving the structure, tone, and main phrasing of the original headline** wherever possible.

You're allowed to reword or restructure only as much as necessary to fulfill the instruction or improve clarity/engagement.

Avoid clichés. Be punchy, vivid, and stay under 12 words.

Original Headline:
"{headline}"

Instruction:
"{tweak}"

Article Text:
{article_text}

Respond only with valid JSON in this format, no code block, no explanation:
{{"headlines":["Adjusted Headline 1","Adjusted Headline 2","Adjusted Headline 3"]}}
""".strip()

CHECK_ACCURACY_TEMPLATE = """
You are an expert headline editor for a financial news website.

Given the article below and a headline, provide:

- A thoughtful and balanced review highlighting how well the headline draws readers and its strengths in engagement.
- Politely note any areas where the headline might cause minor confusion or could be clearer, without being overly critical.
- Suggest two alternative headlines that preserve the strong engagement but improve clarity or accuracy slightly.

Article:
{article_text}

Headline to review:
"{headline}"

Respond in JSON format exactly as follows:

{{
  "review": "Your balanced review highlighting engagement strengths and polite notes on clarity.",
  "suggestions": [
    "Alternative headline 1",
    "Alternative headline 2"
  ]
}}
""".strip()

HEADLINES_TEMPLATE = """
You are a financial journalist writing attention-grabbing, hooky headlines that make readers want to click.

CRITICAL REQUIREMENTS:
- Generate EXACTLY 5 headlines - no more, no less
- Each headline must be under 12 words
- Create attention-grabbing openings that hint at the story without revealing everything
- Use vivid, specific language that grabs attention
- Include specific numbers in only ONE headline per set
- Focus on what's really at stake or what's surprising about this story
- MANDATORY: Start at least 2 headlines with the key company name or person
- MANDATORY: Start at least 1 headline with a broader market/industry angle

HEADLINE STYLES TO CHOOSE FROM:
1. **Competitive Threat**: How this makes the company dangerous to rivals
2. **Market Disruption**: How this changes the entire industry landscape
3. **Stakes**: What's really at risk or up for grabs here?
4. **Hidden Impact**: The real story behind the headlines
5. **Strategic Move**: What broader strategy does this reveal?

EXAMPLES OF HOOKY HEADLINES:
- "Palantir Just Broke Below 50-Day Average—Is It Time To Buy The Dip?"
- "Wall Street Braces For Tech Carnage: 'Disaster' QQQ Options Tell The Story"
- "Producer Inflation Shocks Markets–These 10 Stocks Took The Biggest Hit"
- "The $50 Million Deal That Could Reshape Renewable Energy"
- "Gilead's $350 Million Bet: Could It Disrupt Cancer Treatment Forever?"

AVOID:
- Question headlines that start with "What," "How," "Why," "Is," etc.
- Generic news headlines that just report facts
- Language that sounds like a press release

CRITICAL ACCURACY REQUIREMENTS:
- Headlines must be factually accurate to the article content
- Don't overstate competitive advantages or market impact
- Don't dramatize beyond what the facts support

DIVERSITY REQUIREMENTS:
- Each headline must use completely different language and structure
- Use different action verbs for each headline

Article:
{article_text}

Respond with a numbered list of 5 headlines only.

{rules}
""".strip()

NO_COLON_HEADLINES_TEMPLATE = """
You are a financial journalist writing clean, analytical headlines. Generate 3 compelling headlines (under 12 words each) that capture the core story.

CRITICAL REQUIREMENTS:
- Generate EXACTLY 3 headlines - no more, no less
- Each headline must be under 12 words
- Use natural sentence structure - no colons, dashes, or excessive punctuation
- Focus on one clear point per headline
- Use plain, everyday language - no jargon or dramatic verbs
- Use numerals for any data points
- Start with the company name or key entity

HEADLINE APPROACHES:
1. **Direct Statement**: Clear, factual statement about the main development
2. **Question**: Thoughtful question about implications or outcomes
3. **Contrast**: "X but Y" structure showing tension or surprise

{guide}

Article:
{article_text}

Respond with a numbered list of 3 headlines only.

{rules}
""".strip()

CUSTOM_HEADLINE_TEMPLATE = """
You are an expert headline writer for a top-tier financial publication. Create 1 thoughtful, context-rich headline that provides insight while being highly engaging.

Your headline should follow these principles:

1. **Use vivid, specific language** - Avoid generic terms. Use "Sledgehammer Policies" instead of "tough policies"
2. **Strong action verbs** - Use words like "ignited," "crushing," "unhinged," "dominating"
3. **Historical or comparative context** when relevant - "More Unhinged Than Dot-Com"
4. **Balanced tone** - Informative but engaging, not hysterical
5. **Insight-driven** - Reveal deeper meaning, not just report facts
6. **Create intrigue** while providing enough context to understand the topic

Examples of the style you should aim for:
- "Trump's Sledgehammer Policies Have Ignited Wall Street's Hottest Trade—And It's Not AI"
- "Trump Wanted To Break China—Now It's Crushing The US At Its Own Game"
- "Elon Musk Wants 50 Million AI Brains—Nvidia Still Sets The Standard"

Focus on:
- The single biggest investor takeaway
- Unexpected angles or ironies
- Under 15 words

Article:
{article_text}

Respond with exactly 1 headline only.
""".strip()

SIMILAR_HEADLINES_TEMPLATE = """
Generate 3 alternative headlines similar in style and topic to the following headline:

"{headline}"

Respond with a numbered list of 3 headlines only.
""".strip()

PUNCHY_VARIANTS_TEMPLATE = """
You are a master of viral headlines. Transform this headline into 3 EXTREMELY punchy, emotionally charged, and attention-grabbing variants.

Original headline: "{headline}"

Requirements for each variant:
- Use POWERFUL, emotionally charged words (crash, surge, explode, collapse, dominate, crush, soar, plunge, etc.)
- Create URGENCY (immediate, now, shocking, stunning, devastating, etc.)
- Use numbers when possible (3 reasons, 5 ways, 10x, etc.)
- Make it SHORT and IMPACTFUL (under 10 words)
- Use Title Case for all words
- Make it feel like breaking news or insider information

Examples of the style you should aim for:
- "Tesla Crashes 50% - What Insiders Know Now"
- "This Stock Will Explode 10x - Here's Why"
- "3 Reasons Why This Will Crush the Market"

Respond with a numbered list of 3 headlines only.
""".strip()

SEO_HEADLINE_TEMPLATE = """
You are an SEO expert optimizing financial headlines for maximum search visibility and click-through rates.

Rewrite the headline below as one SEO-optimized headline of at most 8 words:
- Keep the core message and angle of the original headline
- Use the main company name or key entity
- Include a compelling action verb
- Natural sentence structure - avoid colons

EXAMPLES OF GOOD SEO HEADLINES:
- "Tesla Faces Growing Electric Vehicle Competition"
- "Apple Stock Surges On Strong Earnings"
- "Amazon Challenges Walmart In Grocery Market"

Original Headline:
"{headline}"

Respond with the headline only, no numbering or extra text.
""".strip()

MSN_HEADLINES_TEMPLATE = """
You are a headline writer creating MSN-style headlines: short, punchy, action-driven headlines with strong verbs.

CRITICAL REQUIREMENTS:
- Generate EXACTLY 9 headlines total: 3 at Level 1, then 3 at Level 2, then 3 at Level 3
- Each headline must be 7-12 words
- Use direct statements only - NO questions, NO hooks, NO explainers
- Sensational but factually accurate

LEVEL 1 (MODERATE STRENGTH): verbs like Faces, Signals, Shows, Announces, Considers, Rules
Example: "Trump Faces Manufacturing Deal Challenge"

LEVEL 2 (STRONG STRENGTH): verbs like Wins, Delivers, Defies, Strikes, Secures, Forces; use "Blow to [Entity]" when appropriate
Example: "Trump Wins Major Deal in Blow to Mexico"

LEVEL 3 (MAXIMUM STRENGTH): verbs like Crushes, Devastates, Shatters, Demolishes; include numbers from the article when available
Example: "Trump Wins $2 Billion Deal That Crushes Mexico Trade"

CRITICAL ACCURACY:
- Use exact company names and key figures from the article
- Include specific numbers only when mentioned in the article

Article:
{article_text}

Respond with exactly 9 headlines in this exact format:
LEVEL 1 (MODERATE):
1. [headline]
2. [headline]
3. [headline]

LEVEL 2 (STRONG):
1. [headline]
2. [headline]
3. [headline]

LEVEL 3 (MAXIMUM):
1. [headline]
2. [headline]
3. [headline]
""".strip()

_LEAD_PREAMBLE = "You are a financial journalist writing for a broad audience."

LEAD_STYLES: dict[str, str] = {
    "normal": """Write a lead that:
- Opens with the broader industry shift or trend this story exemplifies.
- Clearly states why this development changes the market or investor view.
- Avoids rehashing the article's first sentence; focus on significance.
- Uses simple, direct language; no jargon.""",
    "longer": """Write a detailed lead that:
- Highlights the three most critical insights from the article.
- Provides necessary background but emphasizes why each point matters today.
- Connects these insights to bigger economic or sector-wide implications.
- Uses clear, engaging language without technical jargon.""",
    "shorter": """Write a very brief lead (under 20 words) that:
- Delivers a clever hook or surprising angle related to the article's core news.
- Tells the reader why they should keep reading in one punchy sentence.
- Avoids restating basic facts; focus on intrigue.""",
    "more narrative": """Write a narrative-style lead that:
- Opens with a compelling takeaway or surprising data point from the article.
- Shows why that detail matters for the industry or investors.
- Reflects the article's facts with no invented scenes or characters.
- Maintains a conversational, engaging tone without jargon.""",
    "more context": """Write a context-rich lead that:
- Maps out the long-term trends or past events leading to this news.
- Explains how this story fits into the broader economic backdrop.
- Highlights potential future impacts or risks for investors.
- Uses straightforward language; no jargon.""",
}

LEAD_TEMPLATE = """
{preamble}

{instructions}

Lead:

Article:
{article_text}
""".strip()

HEADLINE_LEAD_TEMPLATE = """
You are a financial journalist writing for a broad audience.

Analyze both the headline and the article content to create a lead that:
- Matches the tone, style, and energy of the headline
- Incorporates key facts and context from the article
- Provides complementary information that doesn't repeat the headline
- Creates a smooth transition from headline to article body
- Is concise (2-3 sentences maximum)
- Uses simple, direct language; no jargon

CRITICAL REQUIREMENTS:
- Do NOT repeat the headline's exact words or phrases
- Do NOT start with "In a..." or similar formal phrases
- Provide the "why" or "how" behind the headline
- Use active voice and strong verbs that match the headline's energy

EXAMPLES:
Headline: "Tesla Stock Plunges 15% After Earnings Miss"
Lead: "Investors punished Tesla for falling short of Wall Street expectations, sending shares to their lowest level in months as concerns mount about the electric vehicle maker's growth trajectory."

Headline: "Fed Signals Three Rate Cuts in 2024"
Lead: "The Federal Reserve's latest projections suggest a more dovish monetary policy stance ahead, potentially providing relief to markets that have been grappling with elevated borrowing costs."

Article Headline: "{headline}"

Article:
{article_text}

Lead:
""".strip()

H2_TEMPLATE = """
You Are A Top-Tier Financial Journalist Writing For A Leading Financial News Website.

Given The Article Below, Insert Exactly 3 Short, Compelling, And Unique H2 Headings Into The Article Text.

Requirements:
- Do NOT place any H2 heading before the lead paragraph (assumed to be the first paragraph).
- Insert H2 headings only after the lead, at natural points where the article shifts topic or highlights key insights.
- Each H2 must be no longer than 4 words.
- H2s should be engaging, previewing the specific upcoming content with energy and unique perspective.
- Capitalize the first letter of every word in each H2 heading.
- Each of the three H2s must have a different structure or style (a question, a bold statement, an insight teaser).
- Format the article with the H2 headings as plain text lines, followed by exactly one blank line, then the paragraph that follows.
- Preserve the original article text except for adding these 3 H2 headings.

Article:
{article_text}

Article With Engaging H2 Headings Inserted:
""".strip()

DIRECT_QUOTES_TEMPLATE = """
You are an expert quote extractor. Your ONLY job is to find and extract DIRECT QUOTES from the article text with 100% ACCURACY.

CRITICAL REQUIREMENTS:
- Extract UP TO 3 DIRECT QUOTES that are 2-8 words long
- Each quote MUST be enclosed in quotation marks (" ") in the original article
- Each quote MUST be VERBATIM from the article - no modifications, no truncation, no paraphrasing
- If a quote is longer than 8 words, skip it and find a shorter one
- Accuracy is more important than quantity - better to return 0 accurate quotes than 3 weak ones

WHAT IS NOT A DIRECT QUOTE:
- Paraphrased statements like "HSBC evaluated that MI350 can now compete"
- Indirect speech like "Trump said the policy would help"

IMPORTANT: If you are unsure whether something is a direct quote, DO NOT include it.

Return only a JSON array of quotes (0-3 quotes), no explanations:
["quote 1", "quote 2", "quote 3"]

If no suitable quotes are found, return an empty array: []

Article text:
{article_text}
""".strip()

IMAGE_IDEAS_TEMPLATE = """
You are a creative visual designer helping create compelling images for financial news articles.

Read the article carefully and create images that reference SPECIFIC DETAILS from it. Do NOT create generic stock/finance images.

ARTICLE/HEADLINE:
{article_text}

For each of 3 image concepts, provide:
1. A short title (3-5 words)
2. A description (15-25 words) explaining exactly what elements will be in the image
3. An ultra-detailed DALL-E prompt (4-6 sentences)

DALL-E PROMPT RULES:
- Reference specific details from the article, described visually
- Do not include company names or brands (DALL-E cannot render real logos or text)
- Start with "Ultra-realistic cinematic widescreen image" or "Photorealistic editorial style 3:2 aspect ratio"
- Specify lighting, atmosphere, textures and technical quality
- ALWAYS end with: "No text or logos."
- Concept 1: the product/service aspect; Concept 2: the business/market aspect; Concept 3: the future/strategic aspect

Return JSON format:
{{
  "ideas": [
    {{"title": "...", "description": "...", "prompt": "... No text or logos."}},
    {{"title": "...", "description": "...", "prompt": "... No text or logos."}},
    {{"title": "...", "description": "...", "prompt": "... No text or logos."}}
  ]
}}
""".strip()

OPTIMIZE_PROMPT_TEMPLATE = """
You are a DALL-E 3 prompt optimization expert. Your job is to transform simple prompts into detailed, effective DALL-E 3 prompts that produce high-quality, accurate images.

USER'S SIMPLE PROMPT:
"{prompt}"

OPTIMIZATION RULES:

1. SUBJECT ACCURACY:
   - Specific person: emphasize recognizable features and likeness
   - Specific object/brand: describe its characteristic design
   - Scene/location: focus on composition, atmosphere, and key visual elements

2. TECHNICAL QUALITY:
   - Always start with: "Ultra-realistic 3:2 widescreen image of..."
   - Include: "Photorealistic quality", "professional photography", "sharp focus"
   - Add appropriate lighting and composition terms

3. FORMAT REQUIREMENTS:
   - Keep under 400 characters
   - Always end with: "No text or logos."

EXAMPLE:
Input: "Bull and bear on Wall Street"
Output: "Ultra-realistic 3:2 widescreen photograph of a powerful bull and bear statue facing each other on Wall Street in New York City. Iconic financial district skyscrapers in background, morning light creating dramatic shadows. Professional cityscape photography, cinematic composition, golden hour lighting. No text or logos."

Return ONLY the optimized prompt, nothing else. No explanations, no quotes around it, just the prompt text.
""".strip()

IMAGE_ALT_TEXT_TEMPLATE = """
Create a concise, descriptive alt-text (50-80 characters) for an AI-generated image based on this description:

"{description}"

The alt-text should:
- Be concise and descriptive
- Focus on the visual elements
- Be suitable for accessibility
- Be 50-80 characters max

Return ONLY the alt-text, nothing else.
""".strip()

VISION_ALT_TEXT_SYSTEM = (
    "You are an expert at generating accessible alt text for images. Generate concise, "
    "descriptive alt text that is 10-50 words (approximately 50-150 characters). Focus on "
    "the main subject, key visual elements, and context. Use natural, conversational "
    "language. Always end with a complete sentence and a period. Never exceed 150 characters."
)

VISION_ALT_TEXT_USER = (
    "Generate concise alt text (10-50 words) for this image. Focus on the main subject and "
    "key visual elements. Always end with a complete sentence and period."
)

ANALYST_RATINGS_TEMPLATE = """
You are a financial journalist summarizing Wall Street analyst activity for {ticker}.

Below are the most recent analyst actions, newest first:
{ratings}

Write two short paragraphs:
1. A big-picture takeaway on how analyst sentiment toward {ticker} has shifted, counting upgrades and downgrades among these actions.
2. A chronological rundown of the individual actions, keeping every date, firm, rating and price target exactly as given.

Do not invent actions, firms or numbers that are not listed. Use plain text only.
""".strip()


WORKSHOP_KEY_NAMES_BLOCK = """
KEY NAMES/ENTITIES TO PRIORITIZE (in order of importance):
{names}

CRITICAL: Start headlines with the FIRST key name listed above. This is the most important source/person in the article.
""".strip()

WORKSHOP_NO_KEY_NAMES = (
    "NO PROMINENT NAMES AVAILABLE: Focus on the core story elements, key data points, and create "
    "curiosity-driven headlines that capture the main narrative without relying on specific people."
)

WORKSHOP_INITIAL_TEMPLATE = """
You are a financial journalist writing attention-grabbing, hooky headlines that make readers want to click.

CRITICAL REQUIREMENTS:
- Generate EXACTLY 3 headlines - no more, no less
- Each headline must be under 12 words
- Create attention-grabbing openings that hint at the story without revealing everything
- Use vivid, specific language that grabs attention
- Include specific numbers in only ONE headline per set
- Focus on what's really at stake or what's surprising about this story
- MANDATORY: Start at least 2 headlines with the key company name or person
- MANDATORY: Start at least 1 headline with a broader market/industry angle

HEADLINE APPROACHES TO CHOOSE FROM:
1. **Competitive Threat**: How this makes the company dangerous to rivals
2. **Market Disruption**: How this changes the entire industry landscape
3. **Stakes**: What's really at risk or up for grabs here?
4. **Insider Knowledge**: What do industry insiders know that others don't?
5. **Hidden Impact**: The real story behind the headlines
6. **Breaking News**: What just broke or what's about to break?
7. **Bold Claim**: Make a dramatic statement about competitive advantage

EXAMPLES OF HOOKY HEADLINES:
- "Wall Street Braces For Tech Carnage: 'Disaster' QQQ Options Tell The Story"
- "Fed's Goolsbee Shows Anxiety As Inflation Hits Non-Tariff Items"
- "Enphase Gets Early Jump On EU Cybersecurity Deadline, Rivals Face 2025 Race"
- "The $50 Million Deal That Could Reshape Renewable Energy"
- "Why This Cybersecurity Move Could Force Competitors Out Of Europe"

CRITICAL ACCURACY REQUIREMENTS:
- Headlines must be factually accurate to the article content
- Don't overstate competitive advantages or market impact
- If a company is "first" or "ahead," specify the context (deadline, timeline, etc.)
- Avoid claiming someone is "the leader" unless the article explicitly states this
- Don't dramatize beyond what the facts support

AVOID:
- Question headlines that start with "What," "How," "Why," "Is," etc.
- Generic news headlines that just report facts
- Language that sounds like a press release
- Formal, academic language

AIM FOR:
- Direct, punchy statements that grab attention immediately
- Market-focused angles that show impact on stocks, competitors, or industries
- Strong action verbs after the company name: "Just," "Secures," "Faces," "Braces," "Shows"
- Sound like market commentary with real perspective, not just reported facts

{key_names}

Article:
{article_text}

Respond with exactly 3 headlines, numbered 1-3, each using a different approach.
""".strip()

WORKSHOP_QUOTE_TEMPLATE = """
You are a financial journalist writing clean, analytical headlines. Create exactly 1 compelling headline that incorporates the provided quote.

CRITICAL REQUIREMENTS:
- Generate EXACTLY 1 headline - no more, no less
- Must be under 12 words
- MUST incorporate the provided quote naturally
- Use natural sentence structure - no colons, dashes, or excessive punctuation
- Use plain, everyday language - no jargon or dramatic verbs
- Use numerals for any data points
- Use single quotes (') around the quote - NEVER double quotes (")

{key_names}

QUOTE TO INCORPORATE: '{quote}'

HEADLINE EXAMPLES (showing how to naturally incorporate quotes):
- Survey: 55% Plan Car Purchases Amid 'Tariff Uncertainty'
- Middle-Income Americans Speed Up 'Car Buying Plans'
- 18% Accelerate Major Purchases Due to 'Price Concerns'

Article:
{article_text}

Respond with exactly 1 headline.
""".strip()

WORKSHOP_ENHANCE_TEMPLATE = """
You are a financial headline editor. Enhance this headline based on the specific instruction.

Original Headline: "{headline}"

Enhancement Instruction: {instruction}

Article Context:
{article_text}

CRITICAL REQUIREMENTS:
- Keep the enhanced headline under 12 words
- Maintain the core message and accuracy
- Follow the specific enhancement instruction
- Use numerals for any data points
- Start with the company name
- MANDATORY STRUCTURAL CHANGE: Use a COMPLETELY DIFFERENT structure than the original headline
- STRUCTURAL OPTIONS TO CHOOSE FROM:
  * Question format: "Will [Company] [Action] [Outcome]?"
  * Action-focused: "[Company] [Strong Verb] [Target/Outcome]"
  * Contrast format: "[Company] [Action] But [Unexpected Result]"
  * Revelation format: "[Company] [Reveals/Exposes/Unleashes] [Discovery]"
  * Warning format: "[Company] [Warns/Alert] [Risk/Threat]"
- QUOTE FORMATTING: If using quotes, ALWAYS use ONLY single quotes (') - NEVER double quotes ("). ALWAYS include the closing quote mark.

Respond with the enhanced headline only.
""".strip()

WORKSHOP_NEW_TEMPLATE = """
You are a financial journalist writing clean, analytical headlines. Create exactly 1 compelling headline based on the specific instruction.

{key_names}

Enhancement Instruction: {instruction}

CRITICAL REQUIREMENTS:
- Generate EXACTLY 1 headline - no more, no less
- Must be under 12 words
- Use natural sentence structure - no colons, dashes, or excessive punctuation
- Use plain, everyday language - no jargon or dramatic verbs
- Start with the company name or key entity
- Focus on implications and meaning, not just facts

HEADLINE APPROACHES TO CHOOSE FROM:
1. **Stakes**: What's really at risk or up for grabs?
2. **Drama**: What's the most surprising or dramatic angle?
3. **Competitive Threat**: How does this threaten or advantage rivals?
4. **Market Impact**: How does this change the game for everyone?
5. **Broader Significance**: Why does this matter beyond just the company?

{guide}

Article:
{article_text}

Respond with exactly 1 headline using a clean, analytical approach.
""".strip()

_QUOTE_FORMATTING = (
    "CRITICAL: Use ONLY single quotes (') - NEVER double quotes (\"). ALWAYS include the closing quote mark. "
    "Make the quote the central focus and build the headline around it. Only use this one quote."
)

ENHANCE_INSTRUCTIONS = {
    "urgent": (
        'Make this headline more urgent and time-sensitive. Add words like "Breaking," "Just In," "Alert," '
        "or create immediate urgency. Focus on the most recent or surprising development."
    ),
    "specific": (
        "Add specific data points, numbers, or concrete details from the article to make this headline "
        "more precise and credible. Include exact figures, dates, or specific outcomes."
    ),
    "analyst": (
        "Reframe this headline to sound like expert analysis or insider insight. Add authority and expertise. "
        'Use phrases like "expert reveals," "insider says," or "analyst warns."'
    ),
    "context": (
        "Add broader market context or industry implications to make this headline more relevant to investors. "
        "Connect to market trends, sector performance, or economic impact."
    ),
    "shorter": (
        "Make this headline shorter and punchier while keeping the key message. Aim for 6-8 words maximum."
    ),
    "curiosity": (
        "Add intrigue and curiosity to make readers want to click. Use words that create mystery or promise "
        'revelation, such as "reveals," "exposes," or "unexpected."'
    ),
    "risk": (
        "Emphasize the risk, danger, or negative implications. Make it clear what's at stake. "
        'Use words like "warning," "danger," "threat," or "crisis."'
    ),
}

NEW_HEADLINE_INSTRUCTIONS = {
    "urgent": (
        'Create a headline that emphasizes urgency and breaking news. Use words like "Breaking," "Just In," '
        'or "Alert." Focus on the most recent or surprising development.'
    ),
    "specific": (
        "Create a headline with specific data points, numbers, or concrete details from the article. "
        "Include exact figures, dates, or specific outcomes."
    ),
    "analyst": (
        "Create a headline that sounds like expert analysis or insider insight. "
        'Use phrases like "expert reveals," "insider says," or "analyst warns."'
    ),
    "context": (
        "Create a headline that adds broader market context or industry implications. "
        "Connect to market trends, sector performance, or economic impact."
    ),
    "shorter": "Create a short and punchy headline while keeping the key message. Aim for 6-8 words maximum.",
    "curiosity": (
        "Create a headline with intrigue and curiosity to make readers want to click. "
        'Include words like "reveals," "exposes," or "unexpected."'
    ),
    "risk": (
        "Create a headline that emphasizes the risk, danger, or negative implications. "
        'Use words like "warning," "danger," "threat," or "crisis."'
    ),
}

KEYWORD_RANKING_SYSTEM = "You are a news relevance ranker. Return only the JSON array of article numbers."

KEYWORD_RANKING_TEMPLATE = """
You are ranking financial news articles by relevance to a search query.

Search Query: "{query}"

Articles ({count} total):
{articles}

Task: Select the {limit} MOST RELEVANT articles about "{query}".

Rules:
- Prioritize articles where "{query}" is the main topic
- EXCLUDE false word matches (e.g., "advance" is not "Vance")
- Include articles with substantive content about "{query}"
- Prefer recent, newsworthy articles

Return a JSON array of the {limit} most relevant article numbers (1-based).
Example: [5, 12, 3, 45, 7]
Return up to {limit} numbers.
""".strip()


def adjust_headline_prompt(headline: str, tweak: str, article_text: str) -> str:
    return ADJUST_HEADLINE_TEMPLATE.format(headline=headline, tweak=tweak, article_text=article_text)


def check_accuracy_prompt(headline: str, article_text: str) -> str:
    return CHECK_ACCURACY_TEMPLATE.format(headline=headline, article_text=article_text)


def headlines_prompt(article_text: str) -> str:
    return HEADLINES_TEMPLATE.format(article_text=article_text, rules=NO_ANALYST_RULES)


def no_colon_headlines_prompt(article_text: str) -> str:
    return NO_COLON_HEADLINES_TEMPLATE.format(
        article_text=article_text,
        guide=CLEAN_HEADLINE_GUIDE,
        rules=NO_ANALYST_RULES,
    )


def custom_headline_prompt(article_text: str) -> str:
    return CUSTOM_HEADLINE_TEMPLATE.format(article_text=article_text)


def similar_headlines_prompt(headline: str) -> str:
    return SIMILAR_HEADLINES_TEMPLATE.format(headline=headline)


def punchy_variants_prompt(headline: str) -> str:
    return PUNCHY_VARIANTS_TEMPLATE.format(headline=headline)


def seo_headline_prompt(headline: str) -> str:
    return SEO_HEADLINE_TEMPLATE.format(headline=headline)


def msn_headlines_prompt(article_text: str) -> str:
    return MSN_HEADLINES_TEMPLATE.format(article_text=article_text)


def lead_prompt(article_text: str, style: str | None = None) -> str:
    key = (style or "").strip().lower()
    if key not in LEAD_STYLES:
        key = "normal"
    return LEAD_TEMPLATE.format(
        preamble=_LEAD_PREAMBLE,
        instructions=LEAD_STYLES[key],
        article_text=article_text,
    )


def headline_lead_prompt(headline: str, article_text: str) -> str:
    return HEADLINE_LEAD_TEMPLATE.format(headline=headline, article_text=article_text)


def h2_prompt(article_text: str) -> str:
    return H2_TEMPLATE.format(article_text=article_text)


def direct_quotes_prompt(article_text: str) -> str:
    return DIRECT_QUOTES_TEMPLATE.format(article_text=article_text)


def image_ideas_prompt(article_text: str) -> str:
    return IMAGE_IDEAS_TEMPLATE.format(article_text=article_text)


def optimize_prompt_prompt(prompt: str) -> str:
    return OPTIMIZE_PROMPT_TEMPLATE.format(prompt=prompt)


def image_alt_text_prompt(description: str) -> str:
    return IMAGE_ALT_TEXT_TEMPLATE.format(description=description)


def analyst_ratings_prompt(ticker: str, ratings_block: str) -> str:
    return ANALYST_RATINGS_TEMPLATE.format(ticker=ticker, ratings=ratings_block)


def _key_names_block(key_names: list[str]) -> str:
    if not key_names:
        return WORKSHOP_NO_KEY_NAMES
    names = "\n".join(f"{index}. {name}" for index, name in enumerate(key_names, start=1))
    return WORKSHOP_KEY_NAMES_BLOCK.format(names=names)


def workshop_initial_prompt(article_text: str, key_names: list[str]) -> str:
    return WORKSHOP_INITIAL_TEMPLATE.format(
        key_names=_key_names_block(key_names),
        article_text=article_text,
    )


def workshop_quote_prompt(article_text: str, quote: str, key_names: list[str]) -> str:
    return WORKSHOP_QUOTE_TEMPLATE.format(
        key_names=_key_names_block(key_names),
        quote=quote,
        article_text=article_text,
    )


def enhancement_instruction(
    enhancement_type: str | None,
    specific_quote: str | None = None,
    custom: str | None = None,
    *,
    new_headline: bool = False,
) -> str:
    """Instruction text for one workshop enhancement type."""
    key = (enhancement_type or "").strip().lower()
    if key == "quote":
        if specific_quote:
            verb = "Create a headline" if new_headline else "Create a completely new headline variation"
            return f'{verb} built around this specific quote: "{specific_quote}". {_QUOTE_FORMATTING}'
        return (
            "Create a headline with a compelling statement that sounds like a direct quote but is "
            "actually a summary of key points from the article."
        )
    if key == "custom":
        if custom:
            return custom
        if new_headline:
            return "Create a headline based on the article content."
        return "Improve this headline based on the article content."
    instructions = NEW_HEADLINE_INSTRUCTIONS if new_headline else ENHANCE_INSTRUCTIONS
    if key in instructions:
        return instructions[key]
    if new_headline:
        return "Create an engaging and accurate headline."
    return "Improve this headline to make it more engaging and accurate."


def workshop_enhance_prompt(headline: str, instruction: str, article_text: str) -> str:
    return WORKSHOP_ENHANCE_TEMPLATE.format(
        headline=headline,
        instruction=instruction,
        article_text=article_text,
    )


def workshop_new_prompt(article_text: str, instruction: str, key_names: list[str]) -> str:
    return WORKSHOP_NEW_TEMPLATE.format(
        key_names=_key_names_block(key_names),
        instruction=instruction,
        guide=CLEAN_HEADLINE_GUIDE,
        article_text=article_text,
    )


def keyword_ranking_prompt(query: str, titles: list[str], limit: int) -> str:
    articles = "\n".join(f'{index}. "{title}"' for index, title in enumerate(titles, start=1))
    return KEYWORD_RANKING_TEMPLATE.format(
        query=query,
        count=len(titles),
        articles=articles,
        limit=limit,
    )
