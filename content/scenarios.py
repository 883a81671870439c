"""content.scenarios

Built-in scenario records (parsed and validated by content.bank.default_bank()).
"""

from __future__ import annotations

from typing import Any, Dict, List

FILLER: Dict[str, Any] = {
    "title": "An Uneventful Week",
    "description": "The phone isn't ringing. It's a quiet week, a chance to breathe and plan your next move.",
    "choices": [
        {"text": "Rest and recuperate.", "outcome": {
            "text": "You take some well-deserved time off and clear your head.",
            "cash": -50, "well_being": 10}},
        {"text": "Practice your craft.", "outcome": {
            "text": "You spend the week honing your skills.",
            "cash": -20, "well_being": 5, "career_progress": 1, "progress_project": 3}},
        {"text": "Go out and network.", "outcome": {
            "text": "You hit the musician hangouts. It's tiring, but you make a few contacts.",
            "cash": -100, "fame": 1, "well_being": -5, "hype": 5}},
    ],
}

SCENARIOS: List[Dict[str, Any]] = [
    # --- early career ---
    {
        "title": "The First Spark",
        "description": "You're full of ideas. The first step is a single song to announce your arrival.",
        "conditions": {"max_fame": 10, "no_project_required": True},
        "once": True,
        "choices": [
            {"text": "Write and record a single.", "outcome": {
                "text": "You pour everything into a debut single. It's rough, but it's yours.",
                "cash": -150, "well_being": 5, "career_progress": 3, "hype": 5,
                "start_project": "SINGLE_1", "progress_project": 5}},
            {"text": "Cover a popular song first.", "outcome": {
                "text": "The cover gets some plays, but nobody knows your own sound yet.",
                "cash": -50, "fame": 2, "hype": 3}},
        ],
    },
    # --- releases ---
    {
        "title": "Time for an EP",
        "description": "Your first single made a small splash. To be taken seriously you need a collection of songs.",
        "conditions": {"required_achievement_id": "PROJECT_SINGLE_1", "no_project_required": True},
        "once": True,
        "choices": [
            {"text": "Start the EP.", "outcome": {
                "text": "You start outlining tracks and themes for your debut EP.",
                "cash": -200, "fame": 2, "hype": 10, "start_project": "EP_1"}},
            {"text": "Keep releasing loose tracks.", "outcome": {
                "text": "You stay nimble, but nobody treats you like a serious act yet.",
                "hype": 3, "career_progress": -1}},
        ],
    },
    {
        "title": "The Debut Album",
        "description": "You've built a following and honed your craft. It's time for a full-length statement.",
        "conditions": {"required_achievement_id": "PROJECT_EP_1", "no_project_required": True, "min_fame": 30},
        "once": True,
        "choices": [
            {"text": "Book the studio and commit.", "outcome": {
                "text": "The ambition is terrifying. You start laying down the foundations of your first album.",
                "cash": -2500, "fame": 5, "well_being": -5, "hype": 20, "start_project": "ALBUM_1"}},
            {"text": "Wait until you can afford it.", "outcome": {
                "text": "You hold off. The songs keep piling up in your notebook.",
                "well_being": 3, "hype": -3}},
        ],
    },
    {
        "title": "The Sophomore Slump?",
        "description": "The debut worked. Now the pressure is on, because the second album is where careers fade or grow.",
        "conditions": {"required_achievement_id": "PROJECT_ALBUM_1", "no_project_required": True, "min_fame": 50},
        "once": True,
        "choices": [
            {"text": "Push into new territory.", "outcome": {
                "text": "You explore new sounds and themes for album number two.",
                "cash": -5000, "well_being": -10, "hype": 10, "start_project": "ALBUM_2"}},
            {"text": "Tour the debut a while longer.", "outcome": {
                "text": "The road pays the bills while the next record waits.",
                "cash": 1200, "fame": 2, "well_being": -6}},
        ],
    },
    {
        "title": "Studio Session",
        "description": "You have a block of studio time booked for the project. How hard do you push?",
        "conditions": {"project_required": True},
        "choices": [
            {"text": "Work through the night.", "outcome": {
                "text": "Long takes, cold coffee and real progress.",
                "cash": -300, "well_being": -8, "fame": 1, "progress_project": 20}},
            {"text": "Keep it to a normal day.", "outcome": {
                "text": "A steady session. A couple of tracks move forward.",
                "cash": -150, "progress_project": 10}},
            {"text": "Cancel and save the money.", "outcome": {
                "text": "You lose the slot and the deposit, but keep most of your cash.",
                "cash": -50, "hype": -2}},
        ],
    },
    {
        "title": "Songwriting Retreat",
        "description": "A friend offers their cabin for a week. No internet, just you and the songs.",
        "conditions": {"project_required": True, "min_well_being": 20},
        "choices": [
            {"text": "Go and write.", "outcome": {
                "text": "You come back with a notebook full of lyrics and a clearer head.",
                "cash": -100, "well_being": 8, "hype": -3, "progress_project": 15,
                "lesson": {"title": "Protecting Creative Time",
                           "explanation": "Finished records come from blocks of uninterrupted work, not stolen hours.",
                           "concept_taught": "Artist Development"}}},
            {"text": "Stay in town and gig.", "outcome": {
                "text": "The gigs pay, but the project barely moves.",
                "cash": 250, "well_being": -4, "progress_project": 2}},
        ],
    },
    {
        "title": "The Open Mic Night",
        "description": "A local bar runs an open mic every Thursday. The crowd is small but honest.",
        "conditions": {"max_fame": 20},
        "choices": [
            {"text": "Play your originals.", "outcome": {
                "text": "A few heads nod along. Someone asks where they can stream your music.",
                "cash": 20, "fame": 2, "well_being": 2, "career_progress": 1, "hype": 2,
                "lesson": {"title": "Building Your Local Fanbase",
                           "explanation": "Small rooms build the core fans who carry you to bigger ones.",
                           "concept_taught": "Revenue Streams"}}},
            {"text": "Test new, unfinished material.", "outcome": {
                "text": "Some songs land, some don't. You learn exactly which is which.",
                "career_progress": 2, "well_being": -2,
                "lesson": {"title": "Testing New Material in Safe Spaces",
                           "explanation": "Low-stakes shows are the cheapest place to find out what works.",
                           "concept_taught": "Revenue Streams"}}},
            {"text": "Skip it and stay home.", "outcome": {
                "text": "You rest, but the week passes without progress.",
                "well_being": 4, "hype": -2}},
        ],
    },
    {
        "title": "Wedding Gig Offer",
        "description": "A family friend wants you to play their wedding reception. The pay is decent, the crowd is not your audience.",
        "conditions": {"max_fame": 40},
        "choices": [
            {"text": "Take the money.", "outcome": {
                "text": "You play three hours of requests. Your wallet thanks you; your soul less so.",
                "cash": 400, "well_being": -5}},
            {"text": "Decline politely.", "outcome": {
                "text": "You keep your weekend and your artistic focus.",
                "well_being": 2}},
        ],
    },
    {
        "title": "Studio Time Discount",
        "description": "A studio has a cancellation and offers you the slot at half price.",
        "conditions": {"min_cash": 300},
        "choices": [
            {"text": "Book it.", "outcome": {
                "text": "You lay down two tracks with a real engineer. The difference is obvious.",
                "cash": -300, "career_progress": 5, "hype": 3}},
            {"text": "Save your money.", "outcome": {
                "text": "You stay cautious. The slot goes to someone else.",
                "well_being": 1}},
        ],
    },
    # --- staff hiring ---
    {
        "title": "Overwhelmed",
        "description": "Emails, bookings, scheduling. You're an artist, not an administrator. Maybe it's time to get help.",
        "conditions": {"min_fame": 15, "missing_staff": ["Manager"]},
        "once": True,
        "choices": [
            {"text": "Find a professional manager.", "outcome": {
                "text": "A respected local manager agrees to take you on. The relief is immediate.",
                "well_being": 10, "hire_staff": "Manager",
                "lesson": {"title": "The Value of Professional Management",
                           "explanation": "A good manager handles business so you can focus on creativity.",
                           "concept_taught": "Contract Basics"}}},
            {"text": "Handle it yourself for now.", "outcome": {
                "text": "You save the money, and spend another night answering emails instead of writing.",
                "well_being": -10,
                "lesson": {"title": "The Hidden Costs of DIY Management",
                           "explanation": "Time spent on admin is time not spent on music.",
                           "concept_taught": "Revenue Streams"}}},
        ],
    },
    {
        "title": "Empty Stages",
        "description": "You're ready to play bigger rooms but nobody is booking you.",
        "conditions": {"min_fame": 20, "missing_staff": ["Booker"]},
        "once": True,
        "choices": [
            {"text": "Hire a booking agent.", "outcome": {
                "text": "A booker with real venue contacts signs on.",
                "hype": 3, "hire_staff": "Booker",
                "lesson": {"title": "The Power of Industry Connections",
                           "explanation": "Bookers trade on relationships you don't have yet.",
                           "concept_taught": "Revenue Streams"}}},
            {"text": "Cold-email venues yourself.", "outcome": {
                "text": "Two replies out of fifty. One is a no.",
                "well_being": -5, "career_progress": 1}},
        ],
    },
    {
        "title": "Lost in the Noise",
        "description": "Thousands of songs drop every day. Yours are disappearing into the feed.",
        "conditions": {"min_fame": 25, "min_hype": 10, "missing_staff": ["Promoter"]},
        "once": True,
        "choices": [
            {"text": "Bring on a promoter.", "outcome": {
                "text": "A promoter starts working the blogs and playlists for you.",
                "hype": 5, "hire_staff": "Promoter",
                "lesson": {"title": "Professional Promotion vs DIY Marketing",
                           "explanation": "Promotion is a skill; paying for it can beat doing it badly.",
                           "concept_taught": "Branding and Image"}}},
            {"text": "Keep posting and hope.", "outcome": {
                "text": "The algorithm shrugs.",
                "hype": -3, "well_being": -2}},
        ],
    },
    {
        "title": "Manager's Big Swing",
        "description": "Your manager has a lead on opening for a touring act, but it means fronting travel costs.",
        "conditions": {"requires_staff": ["Manager"], "min_cash": 500},
        "choices": [
            {"text": "Go for it.", "outcome": {
                "text": "You win over a crowd ten times bigger than usual.",
                "cash": -500, "fame": 6, "hype": 8, "career_progress": 4, "well_being": -4}},
            {"text": "Play it safe.", "outcome": {
                "text": "Your manager is disappointed, but your bank balance is intact.",
                "well_being": 1, "hype": -2}},
        ],
    },
    {
        "title": "Booker's Festival Slot",
        "description": "Your booker secured a mid-afternoon festival slot. The fee is low, the exposure is real.",
        "conditions": {"requires_staff": ["Booker"], "min_fame": 30},
        "choices": [
            {"text": "Play the festival.", "outcome": {
                "text": "A sun-drenched set wins you new fans.",
                "cash": 300, "fame": 5, "hype": 6, "well_being": -3}},
            {"text": "Hold out for a better slot.", "outcome": {
                "text": "The organizers move on. Your booker sighs.",
                "hype": -2}},
        ],
    },
    {
        "title": "Promoter's PR Stunt",
        "description": "Your promoter pitches a pop-up concert on a city rooftop. It's risky and loud.",
        "conditions": {"requires_staff": ["Promoter"]},
        "choices": [
            {"text": "Do the stunt.", "outcome": {
                "text": "Police shut it down after four songs. The videos are everywhere.",
                "cash": -200, "fame": 4, "hype": 12, "well_being": -3}},
            {"text": "Too risky.", "outcome": {
                "text": "You pass. Your promoter looks for something tamer.",
                "hype": -1}},
        ],
    },
    # --- label offers (forced into rotation once contract eligibility is earned) ---
    {
        "title": "The Indie Label Offer",
        "description": "A small but respected indie label wants to sign you and sent over a contract to review.",
        "conditions": {"requires_contract_eligibility": True, "requires_no_label": True},
        "choices": [
            {"text": "Review their contract carefully.", "outcome": {
                "text": "You sit down to review the contract. Time to see what they're really offering.",
                "offer_label": "INDIE",
                "lesson": {"title": "Smart Contract Review",
                           "explanation": "Understanding royalty rates and control clauses protects your career.",
                           "concept_taught": "Contract Basics"}}},
            {"text": "Look at a distribution-only deal instead.", "outcome": {
                "text": "A digital distributor offers to get you on every platform with no strings.",
                "offer_label": "DISTRIBUTION_ONLY",
                "lesson": {"title": "Owning Your Masters",
                           "explanation": "Distribution deals trade support for ownership and control.",
                           "concept_taught": "Rights and Royalties"}}},
            {"text": "Hold out for a major label.", "outcome": {
                "text": "You pass, believing you're destined for bigger things.",
                "well_being": -5, "career_progress": -2}},
        ],
    },
    {
        "title": "The Major Label Bidding War",
        "description": "Two major labels are circling. Both sent contracts for you to examine.",
        "conditions": {"requires_contract_eligibility": True, "requires_no_label": True,
                       "min_fame": 60, "min_career_progress": 40},
        "choices": [
            {"text": "Review Global Records' offer.", "outcome": {
                "text": "The advance is enormous. The fine print is long.",
                "offer_label": "MAJOR_ADVANCE",
                "lesson": {"title": "High Advance vs Creative Control",
                           "explanation": "Advances are loans against royalties, and they bring pressure.",
                           "concept_taught": "Predatory Deals"}}},
            {"text": "Review Visionary Music Group's offer.", "outcome": {
                "text": "Better royalties and real creative freedom. Let's see the full terms.",
                "offer_label": "MAJOR_ROYALTIES",
                "lesson": {"title": "Comparing Multiple Offers",
                           "explanation": "Compare the whole package, not just the upfront money.",
                           "concept_taught": "Rights and Royalties"}}},
            {"text": "Walk away from both.", "outcome": {
                "text": "You keep your independence, and give up major-label resources.",
                "well_being": 5, "career_progress": -5, "hype": -5}},
        ],
    },
    {
        "title": "The 360 Pitch",
        "description": "An entertainment company offers to run every part of your career, for a cut of everything.",
        "conditions": {"requires_contract_eligibility": True, "requires_no_label": True, "min_fame": 45},
        "once": True,
        "choices": [
            {"text": "Hear them out.", "outcome": {
                "text": "They slide a thick contract across the table.",
                "offer_label": "360_DEAL",
                "lesson": {"title": "Understanding 360 Deals",
                           "explanation": "A 360 deal takes a share of touring, merch and endorsements too.",
                           "concept_taught": "Predatory Deals"}}},
            {"text": "Not interested.", "outcome": {
                "text": "You keep every income stream to yourself.",
                "well_being": 2}},
        ],
    },
    {
        "title": "Label Deadline Pressure",
        "description": "Your label wants new material by the end of the month.",
        "conditions": {"requires_label": True},
        "choices": [
            {"text": "Crunch in the studio.", "outcome": {
                "text": "You deliver on time, exhausted.",
                "well_being": -10, "career_progress": 6, "hype": 4}},
            {"text": "Ask for an extension.", "outcome": {
                "text": "They grant it, coldly.",
                "career_progress": -1, "well_being": 3}},
        ],
    },
    # --- general ---
    {
        "title": "The Social Media Controversy",
        "description": "An old post of yours resurfaces and people are angry.",
        "conditions": {"min_fame": 30},
        "choices": [
            {"text": "Apologize sincerely in your own words.", "outcome": {
                "text": "Most fans appreciate the honesty.",
                "fame": -1, "hype": 2, "well_being": -3,
                "lesson": {"title": "Crisis Management Through Authenticity",
                           "explanation": "Audiences forgive honesty faster than spin.",
                           "concept_taught": "Branding and Image"}}},
            {"text": "Stay silent.", "outcome": {
                "text": "Silence reads as indifference.",
                "fame": -4, "hype": -6,
                "lesson": {"title": "The Dangers of Silence in Crisis",
                           "explanation": "Even a brief acknowledgment beats saying nothing.",
                           "concept_taught": "Branding and Image"}}},
        ],
    },
    {
        "title": "The Sellout Opportunity",
        "description": "A soft-drink brand wants your song for a national ad campaign.",
        "conditions": {"min_fame": 50, "min_hype": 40},
        "once": True,
        "choices": [
            {"text": "License the song.", "outcome": {
                "text": "The check clears. Some longtime fans grumble.",
                "cash": 15_000, "fame": 5, "hype": -5, "grant_achievement": "SELLOUT",
                "lesson": {"title": "Brand Partnerships and Artist Credibility",
                           "explanation": "Sync deals pay well but can cost credibility with core fans.",
                           "concept_taught": "Branding and Image"}}},
            {"text": "Turn it down.", "outcome": {
                "text": "You keep your integrity, and your bank balance stays modest.",
                "hype": 4, "well_being": 3}},
        ],
    },
    {
        "title": "Battle of the Bands",
        "description": "The city's biggest band competition has an open slot.",
        "conditions": {"min_fame": 10, "max_fame": 50},
        "once": True,
        "choices": [
            {"text": "Go all in on rehearsal.", "outcome": {
                "text": "You win first place and the crowd chants your name.",
                "cash": 1_000, "fame": 6, "hype": 8, "well_being": -5,
                "grant_achievement": "BATTLE_WINNER"}},
            {"text": "Enter casually.", "outcome": {
                "text": "You finish mid-table. Good practice, nothing more.",
                "fame": 1, "hype": 1}},
        ],
    },
    {
        "title": "Dance Challenge",
        "description": "A creator made a dance to your chorus and it's picking up steam.",
        "conditions": {"min_hype": 20},
        "once": True,
        "choices": [
            {"text": "Jump on it with your own video.", "outcome": {
                "text": "Millions of views. Your song is everywhere for a week.",
                "fame": 8, "hype": 15, "cash": 800, "grant_achievement": "VIRAL_HIT"}},
            {"text": "Let it grow organically.", "outcome": {
                "text": "It fizzles before you capitalize.",
                "hype": 3}},
        ],
    },
    {
        "title": "The Daring Performance",
        "description": "A renowned critic is in the audience tonight.",
        "conditions": {"min_fame": 35},
        "once": True,
        "choices": [
            {"text": "Play the experimental set.", "outcome": {
                "text": "The review calls it 'fearless'.",
                "fame": 5, "career_progress": 5, "hype": 3, "grant_achievement": "CRITICAL_DARLING"}},
            {"text": "Play the hits.", "outcome": {
                "text": "Solid, safe, forgettable.",
                "cash": 200, "fame": 1}},
        ],
    },
    {
        "title": "Afrobeats Festival Invite",
        "description": "A Lagos festival wants you on its new-artists stage.",
        "conditions": {"required_genre": ["afrobeats", "afropop", "afro-fusion"], "min_fame": 15},
        "once": True,
        "choices": [
            {"text": "Fly out and perform.", "outcome": {
                "text": "The crowd knows every word. Home scene, home love.",
                "cash": -300, "fame": 7, "hype": 10, "career_progress": 3}},
            {"text": "Send a recorded set.", "outcome": {
                "text": "It plays between acts. Few notice.",
                "fame": 1}},
        ],
    },
    {
        "title": "Radio Interview",
        "description": "A regional radio show wants you for a live interview.",
        "conditions": {"min_fame_by_difficulty": {"beginner": 10, "realistic": 20, "hardcore": 30}},
        "choices": [
            {"text": "Go on air.", "outcome": {
                "text": "You're charming and quick. The host plays two of your songs.",
                "fame": 3, "hype": 4}},
            {"text": "Decline, you're not ready.", "outcome": {
                "text": "Maybe next time.",
                "well_being": 1}},
        ],
    },
    {
        "title": "Running on Empty",
        "description": "You can't remember the last time you slept properly.",
        "conditions": {"max_well_being": 25},
        "choices": [
            {"text": "Cancel everything and rest.", "outcome": {
                "text": "A week off does wonders, though momentum slows.",
                "well_being": 20, "hype": -5, "cash": -100}},
            {"text": "Push through.", "outcome": {
                "text": "You keep going. Your body keeps the score.",
                "well_being": -8, "career_progress": 2}},
        ],
    },
    {
        "title": "Loan Offer",
        "description": "You're in the red. A 'friend of a friend' offers a quick loan.",
        "conditions": {"max_cash": -1},
        "choices": [
            {"text": "Take the loan.", "outcome": {
                "text": "The cash helps now. The terms will hurt later.",
                "cash": 800, "well_being": -6}},
            {"text": "Pick up extra shifts instead.", "outcome": {
                "text": "Long hours at a day job chip away at the debt.",
                "cash": 300, "well_being": -4, "career_progress": -1}},
        ],
    },
    {
        "title": "Merch Drop",
        "description": "Fans keep asking for t-shirts.",
        "conditions": {"min_fame": 20, "min_cash": 400},
        "choices": [
            {"text": "Print a small batch.", "outcome": {
                "text": "They sell out in a weekend.",
                "cash": 600, "hype": 3}},
            {"text": "Go big on a premium line.", "outcome": {
                "text": "Half the stock sits in your closet.",
                "cash": -400, "hype": 2}},
        ],
    },
]
