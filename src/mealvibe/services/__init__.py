"""
External collaborators behind the wizard.

- recommendations: prompt → LLM → SuggestionSet
- fridge_scan: photo → detected ingredient text
- auth: signup/signin/complete-setup → UserProfile
"""
