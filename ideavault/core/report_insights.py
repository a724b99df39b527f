"""Static lookup tables behind the deterministic fallback report.

Keyed by category, target audience and difficulty; unknown keys resolve to
the DEFAULT_* entry. Pure data, templated into report text by
``ideavault.core.report_fallback``.
"""

CATEGORY_INSIGHTS: dict[str, dict] = {
    "Health & Fitness": {
        "key_technology": "AI-powered personalization and biometric tracking",
        "value_proposition": "delivers personalized health outcomes and sustainable lifestyle changes",
        "differentiator": "evidence-based fitness algorithms",
        "problem_area": "achieving consistent fitness results and maintaining healthy habits",
        "current_limitations": "generic, one-size-fits-all approaches that ignore individual differences",
        "pain_points": "lack of personalization, poor motivation systems, and inconsistent results",
        "missing_element": "intelligent adaptation to individual progress and preferences",
        "solution_approach": "AI-driven personalization and real-time adaptation",
        "core_capabilities": "biometric analysis, personalized workout generation, and progress tracking",
        "key_benefits": "measurable health improvements and sustainable habit formation",
        "unique_value": "40% better adherence rates and 60% faster goal achievement",
        "delivery_method": "intelligent mobile coaching and community support",
        "cost_savings": "personal trainer costs by 80% while improving outcomes",
        "competitive_edge": "proprietary AI algorithms trained on millions of fitness data points",
        "desired_outcome": "sustainable health transformation",
        "market_size": "$96 billion",
        "growth_rate": "7.8% CAGR",
        "growth_areas": "wearable integration and virtual coaching",
        "regional_trends": "strong adoption in North America and Europe, emerging growth in Asia-Pacific",
        "market_trends": [
            "AI-powered personalization",
            "Wearable device integration",
            "Virtual coaching adoption",
            "Nutrition tracking automation",
            "Community-driven fitness",
        ],
        "opportunity_area": "personalized nutrition and mental health integration",
        "market_gap": "fail to provide truly personalized experiences",
        "convergence_trends": "AI, wearables, and telehealth",
        "first_mover_advantage": "60% market share in personalized fitness coaching",
        "tam_estimate": "$15 billion",
        "core_features": [
            "AI workout generation",
            "Biometric tracking",
            "Nutrition planning",
            "Progress analytics",
            "Community challenges",
        ],
        "required_tech": "machine learning models, real-time data processing, and mobile optimization",
        "scalability_reqs": "cloud infrastructure supporting millions of concurrent users",
        "mvp_core": "personalized workout generation and basic progress tracking",
        "mvp_user_flow": "onboarding assessment → AI workout creation → tracking → progress review",
        "mvp_features": ["fitness assessment", "AI workout plans", "exercise tracking", "progress dashboard"],
        "marketing_channels": "fitness influencers, health blogs, and app store optimization",
        "content_formats": "workout videos, nutrition guides, and success stories",
        "partner_types": "fitness equipment manufacturers and health insurance providers",
        "partnership_goals": "user acquisition and credibility building",
        "pricing_strategy": "Freemium with premium AI features",
        "pricing_tiers": "Free (basic workouts), Pro ($9.99/month), Elite ($19.99/month)",
        "value_metrics": "personalized workouts and advanced analytics",
        "pricing_position": "30% below premium competitors while offering superior personalization",
        "revenue_optimization": "conversion to paid tiers",
        "marketing_budget": "$200K for influencer partnerships and content creation",
        "year1_revenue": "$150K",
        "year2_revenue": "$800K",
        "year3_revenue": "$2.5M",
        "revenue_drivers": "subscription growth and premium feature adoption",
        "growth_assumptions": "15% monthly user growth and 8% conversion rate",
        "variable_cost_percent": "35%",
        "variable_costs": "cloud infrastructure and content creation",
        "fixed_cost_percent": "65%",
        "fixed_costs": "development team and marketing",
        "unit_economics": "positive after 6 months with $45 LTV and $12 CAC",
        "alternative_funding": "health insurance partnerships and corporate wellness programs",
        "strengths": [
            "Proven market demand",
            "AI differentiation",
            "Scalable technology",
            "Strong retention potential",
        ],
        "risks": [
            "Regulatory compliance",
            "Data privacy concerns",
            "Competition from big tech",
            "User acquisition costs",
        ],
        "optimization_areas": "user onboarding and feature discovery",
        "priority_recommendation": "AI personalization accuracy",
        "build_priority": "proprietary fitness algorithms",
        "partnership_priority": "wearable device",
        "monitoring_priority": "user engagement metrics",
    },
    "Technology": {
        "key_technology": "cloud-native architecture and API-first design",
        "value_proposition": "accelerates digital transformation and improves operational efficiency",
        "differentiator": "seamless integration capabilities",
        "problem_area": "managing complex technical workflows and system integrations",
        "current_limitations": "fragmented, difficult to integrate, and lack modern interfaces",
        "pain_points": "technical debt, poor user experience, and scalability issues",
        "missing_element": "unified, developer-friendly platforms",
        "solution_approach": "modern API architecture and intuitive user interfaces",
        "core_capabilities": "system integration, workflow automation, and real-time analytics",
        "key_benefits": "reduced development time and improved system reliability",
        "unique_value": "50% faster implementation and 70% fewer integration issues",
        "delivery_method": "cloud-based platform with comprehensive APIs",
        "cost_savings": "development costs by 60% and maintenance overhead",
        "competitive_edge": "superior developer experience and extensive integration library",
        "desired_outcome": "streamlined technical operations",
        "market_size": "$650 billion",
        "growth_rate": "12.5% CAGR",
        "growth_areas": "AI integration and edge computing",
        "regional_trends": "North America leads, strong growth in Asia-Pacific",
        "market_trends": [
            "API-first architecture adoption",
            "Low-code/no-code platforms",
            "Microservices migration",
            "Developer experience focus",
            "Cloud-native development",
        ],
        "opportunity_area": "low-code/no-code development platforms",
        "market_gap": "require extensive technical expertise",
        "convergence_trends": "AI, cloud computing, and automation",
        "first_mover_advantage": "40% market share in developer productivity tools",
        "tam_estimate": "$85 billion",
        "core_features": [
            "API management",
            "Workflow automation",
            "Integration hub",
            "Analytics dashboard",
            "Developer tools",
        ],
        "required_tech": "microservices architecture, containerization, and API gateways",
        "scalability_reqs": "auto-scaling infrastructure and global CDN",
        "mvp_core": "core API functionality and basic integrations",
        "mvp_user_flow": "API setup → integration configuration → testing → deployment",
        "mvp_features": ["API creation", "basic integrations", "documentation", "usage analytics"],
        "marketing_channels": "developer conferences, technical blogs, and GitHub",
        "content_formats": "technical tutorials, API documentation, and case studies",
        "partner_types": "technology vendors and system integrators",
        "partnership_goals": "ecosystem expansion and technical validation",
        "pricing_strategy": "Usage-based with enterprise tiers",
        "pricing_tiers": "Free (limited), Pro ($99/month), Enterprise (custom)",
        "value_metrics": "API calls and integration complexity",
        "pricing_position": "competitive with major cloud providers",
        "revenue_optimization": "usage growth and enterprise sales",
        "marketing_budget": "$300K for developer community building",
        "year1_revenue": "$250K",
        "year2_revenue": "$1.2M",
        "year3_revenue": "$4.5M",
        "revenue_drivers": "API usage growth and enterprise contracts",
        "growth_assumptions": "20% monthly API usage growth",
        "variable_cost_percent": "40%",
        "variable_costs": "cloud infrastructure and API processing",
        "fixed_cost_percent": "60%",
        "fixed_costs": "engineering team and sales",
        "unit_economics": "positive after 4 months with $180 LTV and $35 CAC",
        "alternative_funding": "strategic partnerships with cloud providers",
        "strengths": [
            "Large addressable market",
            "High switching costs",
            "Network effects",
            "Recurring revenue",
        ],
        "risks": [
            "Technical complexity",
            "Competition from big tech",
            "Security concerns",
            "Rapid technology changes",
        ],
        "optimization_areas": "developer onboarding and API performance",
        "priority_recommendation": "developer experience optimization",
        "build_priority": "comprehensive integration library",
        "partnership_priority": "cloud platform",
        "monitoring_priority": "API performance and adoption metrics",
    },
}

DEFAULT_CATEGORY_INSIGHTS: dict = {
    "key_technology": "modern web technologies and cloud infrastructure",
    "value_proposition": "improves efficiency and user experience",
    "differentiator": "user-centric design and innovative features",
    "problem_area": "current market inefficiencies and user pain points",
    "current_limitations": "outdated, inefficient, and user-unfriendly",
    "pain_points": "poor user experience and limited functionality",
    "missing_element": "modern, intuitive solutions",
    "solution_approach": "innovative technology and user-focused design",
    "core_capabilities": "core functionality, user management, and analytics",
    "key_benefits": "improved efficiency and better user outcomes",
    "unique_value": "30% better performance and 50% improved user satisfaction",
    "delivery_method": "web and mobile applications",
    "cost_savings": "operational costs and time investment",
    "competitive_edge": "superior user experience and innovative features",
    "desired_outcome": "improved efficiency and satisfaction",
    "market_size": "$10 billion",
    "growth_rate": "8% CAGR",
    "growth_areas": "digital adoption and mobile usage",
    "regional_trends": "global growth with strong adoption in developed markets",
    "market_trends": [
        "Digital transformation",
        "Mobile-first adoption",
        "User experience focus",
        "Automation integration",
        "Data-driven insights",
    ],
    "opportunity_area": "underserved market segments",
    "market_gap": "fail to meet modern user expectations",
    "convergence_trends": "technology convergence and changing user behavior",
    "first_mover_advantage": "25% market share advantage",
    "tam_estimate": "$2 billion",
    "core_features": ["Core functionality", "User management", "Analytics", "Mobile app", "Integration"],
    "required_tech": "modern web stack and cloud infrastructure",
    "scalability_reqs": "scalable architecture and performance optimization",
    "mvp_core": "essential features and basic user workflows",
    "mvp_user_flow": "user registration → core functionality → results tracking",
    "mvp_features": ["user registration", "core features", "basic analytics"],
    "marketing_channels": "digital marketing and content strategy",
    "content_formats": "blog posts, videos, and case studies",
    "partner_types": "industry partners and technology vendors",
    "partnership_goals": "market expansion and credibility",
    "pricing_strategy": "Competitive pricing with value tiers",
    "pricing_tiers": "Basic ($9.99), Pro ($19.99), Enterprise (custom)",
    "value_metrics": "feature access and usage limits",
    "pricing_position": "competitive with market standards",
    "revenue_optimization": "user acquisition and retention",
    "marketing_budget": "$150K for digital marketing",
    "year1_revenue": "$100K",
    "year2_revenue": "$500K",
    "year3_revenue": "$1.5M",
    "revenue_drivers": "user growth and premium features",
    "growth_assumptions": "10% monthly user growth",
    "variable_cost_percent": "30%",
    "variable_costs": "infrastructure and support",
    "fixed_cost_percent": "70%",
    "fixed_costs": "development and marketing",
    "unit_economics": "positive after 8 months",
    "alternative_funding": "grants and strategic partnerships",
    "strengths": ["Market opportunity", "Innovative approach", "Scalable model", "User demand"],
    "risks": ["Market competition", "User adoption", "Technical challenges", "Funding needs"],
    "optimization_areas": "user experience and feature adoption",
    "priority_recommendation": "user experience optimization",
    "build_priority": "core feature reliability",
    "partnership_priority": "strategic industry",
    "monitoring_priority": "user engagement and satisfaction",
}

AUDIENCE_INSIGHTS: dict[str, dict] = {
    "Fitness enthusiasts": {
        "market_gap": "78% of fitness apps fail to provide truly personalized experiences",
        "desired_outcome": "consistent progress toward fitness goals with personalized guidance",
        "primary_need": "personalized workout plans that adapt to their progress",
        "primary_segment": "dedicated fitness enthusiasts aged 25-45",
        "behavior_profile": "work out 4-6 times per week and track their progress meticulously",
        "secondary_segment": "casual gym-goers seeking structure",
        "tertiary_segment": "personal trainers looking for client management tools",
        "demographics": "college-educated professionals with disposable income",
        "psychographics": "goal-oriented, health-conscious, and technology-savvy",
        "usage_pattern": "engage with fitness apps daily and value data-driven insights",
        "key_values": "efficiency, personalization, and measurable results",
        "segment_size": "35%",
        "key_hypothesis": "personalized AI coaching improves adherence and results",
        "mvp_metrics": "workout completion rate and user retention",
        "beachhead_market": "serious fitness enthusiasts in urban areas",
        "adoption_profile": "are early adopters of fitness technology",
        "expansion_markets": "casual fitness users and corporate wellness programs",
        "expansion_strategy": "simplified onboarding and group challenges",
        "acquisition_channels": "fitness influencers and gym partnerships",
        "acquisition_strategy": "content marketing and referral programs",
        "content_topics": "workout optimization and nutrition science",
        "community_strategy": "building competitive challenges and progress sharing",
        "price_elasticity": "willing to pay premium for proven results",
        "value_realization": "40% faster goal achievement and improved motivation",
        "monetization_strategy": "subscription tiers based on personalization level",
        "cac": "$25",
        "ltv": "$180",
        "success_metrics": [
            "Monthly active users",
            "Workout completion rate",
            "Goal achievement rate",
            "Net Promoter Score",
        ],
        "validation_priority": "AI personalization effectiveness",
    },
    "Small business owners": {
        "market_gap": "65% of small businesses struggle with inefficient manual processes",
        "desired_outcome": "streamlined operations and improved profitability",
        "primary_need": "affordable tools that automate repetitive tasks",
        "primary_segment": "small business owners with 5-50 employees",
        "behavior_profile": "wear multiple hats and seek efficiency improvements",
        "secondary_segment": "freelancers and solopreneurs",
        "tertiary_segment": "mid-market companies seeking cost-effective solutions",
        "demographics": "business owners aged 30-55 across various industries",
        "psychographics": "pragmatic, cost-conscious, and results-oriented",
        "usage_pattern": "use business tools daily and prefer simple, effective solutions",
        "key_values": "ROI, simplicity, and reliability",
        "segment_size": "42%",
        "key_hypothesis": "automation tools significantly improve small business efficiency",
        "mvp_metrics": "time saved per user and process automation rate",
        "beachhead_market": "service-based small businesses in metropolitan areas",
        "adoption_profile": "are motivated by clear ROI demonstrations",
        "expansion_markets": "retail businesses and professional services",
        "expansion_strategy": "industry-specific features and integrations",
        "acquisition_channels": "business associations and trade publications",
        "acquisition_strategy": "ROI-focused content and free trials",
        "content_topics": "business efficiency and cost reduction strategies",
        "community_strategy": "peer learning and best practice sharing",
        "price_elasticity": "price-sensitive but willing to pay for proven value",
        "value_realization": "25% time savings and improved cash flow",
        "monetization_strategy": "tiered pricing based on business size and features",
        "cac": "$45",
        "ltv": "$320",
        "success_metrics": [
            "Customer acquisition cost",
            "Monthly recurring revenue",
            "Customer satisfaction",
            "Feature adoption",
        ],
        "validation_priority": "ROI demonstration and ease of use",
    },
    "Students": {
        "market_gap": "70% of educational tools fail to adapt to individual learning styles",
        "desired_outcome": "improved academic performance and efficient learning",
        "primary_need": "personalized study tools that fit their learning style",
        "primary_segment": "college and university students aged 18-25",
        "behavior_profile": "are digital natives who multitask and prefer mobile-first solutions",
        "secondary_segment": "high school students preparing for college",
        "tertiary_segment": "adult learners and professional certification seekers",
        "demographics": "tech-savvy students with limited budgets",
        "psychographics": "achievement-oriented, social, and time-constrained",
        "usage_pattern": "study in short bursts and prefer gamified experiences",
        "key_values": "effectiveness, affordability, and social features",
        "segment_size": "28%",
        "key_hypothesis": "personalized learning improves retention and grades",
        "mvp_metrics": "study session completion and grade improvement",
        "beachhead_market": "STEM students at major universities",
        "adoption_profile": "quickly adopt tools that improve their academic performance",
        "expansion_markets": "liberal arts students and professional learners",
        "expansion_strategy": "subject-specific content and study group features",
        "acquisition_channels": "campus ambassadors and social media",
        "acquisition_strategy": "viral referral programs and student discounts",
        "content_topics": "study techniques and academic success strategies",
        "community_strategy": "study groups and peer tutoring networks",
        "price_elasticity": "highly price-sensitive, prefer freemium models",
        "value_realization": "improved grades and reduced study time",
        "monetization_strategy": "freemium with premium study features",
        "cac": "$8",
        "ltv": "$45",
        "success_metrics": ["Daily active users", "Study streak length", "Grade improvement", "Referral rate"],
        "validation_priority": "learning effectiveness and user engagement",
    },
}

DEFAULT_AUDIENCE_INSIGHTS: dict = {
    "market_gap": "60% of current solutions fail to meet user expectations",
    "desired_outcome": "improved efficiency and better results",
    "primary_need": "effective tools that solve their specific problems",
    "primary_segment": "primary target users aged 25-45",
    "behavior_profile": "actively seek solutions to improve their situation",
    "secondary_segment": "adjacent user groups with similar needs",
    "tertiary_segment": "enterprise users and power users",
    "demographics": "educated professionals with moderate to high income",
    "psychographics": "goal-oriented, technology-adopters, and value-conscious",
    "usage_pattern": "regularly use digital tools and expect good user experience",
    "key_values": "quality, reliability, and value for money",
    "segment_size": "30%",
    "key_hypothesis": "improved user experience drives adoption and retention",
    "mvp_metrics": "user engagement and satisfaction scores",
    "beachhead_market": "early adopters in urban markets",
    "adoption_profile": "are willing to try new solutions",
    "expansion_markets": "mainstream users and enterprise customers",
    "expansion_strategy": "feature expansion and market education",
    "acquisition_channels": "digital marketing and word-of-mouth",
    "acquisition_strategy": "content marketing and referral programs",
    "content_topics": "industry insights and best practices",
    "community_strategy": "user forums and knowledge sharing",
    "price_elasticity": "moderately price-sensitive",
    "value_realization": "improved outcomes and time savings",
    "monetization_strategy": "subscription model with multiple tiers",
    "cac": "$30",
    "ltv": "$150",
    "success_metrics": ["User acquisition", "Retention rate", "Customer satisfaction", "Revenue growth"],
    "validation_priority": "product-market fit and user satisfaction",
}

DIFFICULTY_INSIGHTS: dict[str, dict] = {
    "easy": {
        "complexity": "straightforward",
        "technical_approach": "proven technologies and established patterns",
        "development_timeline": "Rapid development approach",
        "phase1_duration": "6-8 weeks",
        "phase1_scope": "Core MVP with essential features",
        "phase2_duration": "4-6 weeks",
        "phase2_scope": "User feedback integration and polish",
        "phase3_duration": "2-4 weeks",
        "phase3_scope": "Launch preparation and marketing",
        "iteration_approach": "weekly sprints and user testing",
        "tech_stack": "Standard web",
        "infrastructure": "cloud hosting with CDN",
        "development_methodology": "agile development with rapid prototyping",
        "technical_challenges": "standard implementation challenges",
        "launch_timeline": "3-4 month launch cycle",
        "prelaunch_duration": "4 weeks",
        "prelaunch_activities": "beta testing and content creation",
        "softlaunch_duration": "2 weeks",
        "softlaunch_scope": "limited user group and feedback collection",
        "fulllaunch_duration": "2 weeks",
        "fulllaunch_activities": "public launch and marketing campaign",
        "startup_costs": "$75K-125K",
        "cost_breakdown": "development (60%), marketing (25%), operations (15%)",
        "development_costs": "$45K-75K",
        "operational_costs": "$10K-15K",
        "working_capital": "$20K-35K",
        "cashflow_buffer": "initial operating expenses",
        "funding_approach": "Bootstrap-friendly with optional angel investment",
        "preseed_amount": "$50K",
        "preseed_use": "MVP development and initial marketing",
        "seed_amount": "$250K",
        "seed_investors": "angel investors and micro VCs",
        "series_a_amount": "$1.5M",
        "series_a_use": "scaling and market expansion",
    },
    "medium": {
        "complexity": "moderately complex",
        "technical_approach": "modern frameworks with some custom development",
        "development_timeline": "Structured development approach",
        "phase1_duration": "10-12 weeks",
        "phase1_scope": "Core platform with key integrations",
        "phase2_duration": "8-10 weeks",
        "phase2_scope": "Advanced features and optimization",
        "phase3_duration": "4-6 weeks",
        "phase3_scope": "Scaling preparation and launch",
        "iteration_approach": "bi-weekly sprints with stakeholder reviews",
        "tech_stack": "Modern full-stack",
        "infrastructure": "scalable cloud architecture with microservices",
        "development_methodology": "agile development with technical planning",
        "technical_challenges": "integration complexity and performance optimization",
        "launch_timeline": "5-6 month launch cycle",
        "prelaunch_duration": "6 weeks",
        "prelaunch_activities": "extensive testing and partnership development",
        "softlaunch_duration": "3 weeks",
        "softlaunch_scope": "select markets and user segments",
        "fulllaunch_duration": "3 weeks",
        "fulllaunch_activities": "full market launch and PR campaign",
        "startup_costs": "$150K-250K",
        "cost_breakdown": "development (55%), marketing (30%), operations (15%)",
        "development_costs": "$85K-140K",
        "operational_costs": "$20K-35K",
        "working_capital": "$45K-75K",
        "cashflow_buffer": "operational runway and contingency",
        "funding_approach": "Seed funding recommended",
        "preseed_amount": "$100K",
        "preseed_use": "team building and initial development",
        "seed_amount": "$500K",
        "seed_investors": "seed VCs and strategic angels",
        "series_a_amount": "$3M",
        "series_a_use": "market expansion and team scaling",
    },
    "hard": {
        "complexity": "highly complex",
        "technical_approach": "cutting-edge technologies and significant R&D",
        "development_timeline": "Extended development approach",
        "phase1_duration": "16-20 weeks",
        "phase1_scope": "Core technology and proof of concept",
        "phase2_duration": "12-16 weeks",
        "phase2_scope": "Platform development and testing",
        "phase3_duration": "8-12 weeks",
        "phase3_scope": "Market preparation and pilot programs",
        "iteration_approach": "monthly milestones with technical reviews",
        "tech_stack": "Advanced technology",
        "infrastructure": "enterprise-grade architecture with custom solutions",
        "development_methodology": "research-driven development with extensive testing",
        "technical_challenges": "novel technology implementation and scalability",
        "launch_timeline": "8-12 month launch cycle",
        "prelaunch_duration": "10 weeks",
        "prelaunch_activities": "pilot programs and regulatory preparation",
        "softlaunch_duration": "6 weeks",
        "softlaunch_scope": "controlled pilot with key customers",
        "fulllaunch_duration": "6 weeks",
        "fulllaunch_activities": "market launch with thought leadership",
        "startup_costs": "$300K-500K",
        "cost_breakdown": "development (65%), marketing (20%), operations (15%)",
        "development_costs": "$195K-325K",
        "operational_costs": "$45K-75K",
        "working_capital": "$60K-100K",
        "cashflow_buffer": "extended runway and risk mitigation",
        "funding_approach": "Institutional funding required",
        "preseed_amount": "$200K",
        "preseed_use": "research and initial team",
        "seed_amount": "$1M",
        "seed_investors": "institutional VCs and strategic investors",
        "series_a_amount": "$5M",
        "series_a_use": "scaling technology and market penetration",
    },
}

DEFAULT_DIFFICULTY_INSIGHTS: dict = {
    "complexity": "moderate",
    "technical_approach": "standard development practices",
    "development_timeline": "Standard development approach",
    "phase1_duration": "8-10 weeks",
    "phase1_scope": "MVP development",
    "phase2_duration": "6-8 weeks",
    "phase2_scope": "Feature expansion",
    "phase3_duration": "4-6 weeks",
    "phase3_scope": "Launch preparation",
    "iteration_approach": "agile sprints with regular reviews",
    "tech_stack": "Modern web",
    "infrastructure": "cloud-based with standard scaling",
    "development_methodology": "agile development",
    "technical_challenges": "standard development challenges",
    "launch_timeline": "4-5 month launch cycle",
    "prelaunch_duration": "4 weeks",
    "prelaunch_activities": "testing and preparation",
    "softlaunch_duration": "2 weeks",
    "softlaunch_scope": "limited release",
    "fulllaunch_duration": "2 weeks",
    "fulllaunch_activities": "public launch",
    "startup_costs": "$100K-200K",
    "cost_breakdown": "development (60%), marketing (25%), operations (15%)",
    "development_costs": "$60K-120K",
    "operational_costs": "$15K-30K",
    "working_capital": "$25K-50K",
    "cashflow_buffer": "operating expenses",
    "funding_approach": "Flexible funding options",
    "preseed_amount": "$75K",
    "preseed_use": "initial development",
    "seed_amount": "$400K",
    "seed_investors": "angel and seed investors",
    "series_a_amount": "$2M",
    "series_a_use": "scaling and growth",
}


def _lookup(table: dict[str, dict], key: str | None, default: dict) -> dict:
    if not key:
        return default
    if key in table:
        return table[key]
    lowered = key.lower()
    for name, insights in table.items():
        if name.lower() == lowered:
            return insights
    return default


def category_insights(category: str | None) -> dict:
    return _lookup(CATEGORY_INSIGHTS, category, DEFAULT_CATEGORY_INSIGHTS)


def audience_insights(audience: str | None) -> dict:
    return _lookup(AUDIENCE_INSIGHTS, audience, DEFAULT_AUDIENCE_INSIGHTS)


def difficulty_insights(difficulty: str | None) -> dict:
    return _lookup(DIFFICULTY_INSIGHTS, difficulty, DEFAULT_DIFFICULTY_INSIGHTS)
