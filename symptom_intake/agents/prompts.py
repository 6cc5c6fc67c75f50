"""
Prompt templates for the diagnostic agent.

Both prompts ask for a single JSON object in the Analysis shape so the reply
can be validated with the same models the local engine produces. All
patient-facing text is requested in Brazilian Portuguese.
"""

DIAGNOSTIC_SYSTEM_PROMPT = """
You are a clinical decision-support assistant for community health workers in
remote areas of Brazil. You help the health worker decide how urgently a patient
needs care. You are NOT a doctor and you do not replace one.

Rules:
- Be conservative with critical conditions and prioritise anything that needs
  immediate attention.
- Use clear language a health worker without medical training can follow.
- Consider the remote context: limited equipment, long transport times.
- Focus on common, treatable conditions.
- Write every text field in Brazilian Portuguese.
- Reply with ONLY the JSON object. No prose before or after it.
"""

ANALYSIS_PROMPT = """
Analyse the patient below and produce a structured preliminary assessment.

PATIENT DATA:
- Name: {name}
- Age: {age} years
- Gender: {gender}
- Symptoms: {symptoms}
- Medical history: {medical_history}
- Current medications: {current_medications}
- Vital signs: {vital_signs}

INSTRUCTIONS:
1. Identify possible medical conditions from the symptoms.
2. Give each condition a probability between 0 and 1.
3. Set its urgency: immediate, urgent, moderate or low.
4. Write 3-5 specific follow-up questions that would confirm or rule out the
   conditions.
5. Give recommendations for each condition and general recommendations.

RESPONSE FORMAT (JSON):
{{
  "initial_assessment": "Initial assessment based on the symptoms",
  "possible_conditions": [
    {{
      "condition": "Condition name",
      "probability": 0.8,
      "confidence": "high|medium|low",
      "symptoms": ["symptom 1", "symptom 2"],
      "recommendations": ["recommendation 1", "recommendation 2"],
      "urgency": "immediate|urgent|moderate|low",
      "next_steps": ["step 1", "step 2"]
    }}
  ],
  "generated_questions": [
    {{
      "id": "question_1",
      "text": "Specific question",
      "type": "yes_no|multiple_choice|scale|text",
      "options": ["option 1", "option 2"],
      "category": "cardiovascular|neurological|respiratory|general",
      "priority": "high|medium|low"
    }}
  ],
  "risk_level": "critical|high|medium|low",
  "recommendations": ["general recommendation 1", "general recommendation 2"]
}}

"options" is only used for multiple_choice questions.
"""

REFINEMENT_PROMPT = """
Refine the initial diagnosis using the patient's answers to the follow-up
questions.

INITIAL ANALYSIS:
{analysis_json}

ANSWERS:
{answers_text}

INSTRUCTIONS:
1. Adjust the probability of each condition based on the answers.
2. Update each confidence level.
3. Keep exactly the same JSON format as the initial analysis.
4. Add newly identified conditions if needed.
5. Update the recommendations with the new information.

Return only the updated JSON object.
"""
