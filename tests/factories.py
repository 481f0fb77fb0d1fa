def property_payload(**overrides):
    payload = {
        "name": "Skyline Residency",
        "type": "residential",
        "builder": "Acme Developers",
        "status": "available",
        "location": "Whitefield, Bengaluru",
        "description": "Premium apartments close to the tech park",
        "price": 7500000,
        "amenities": ["Pool", "Gym"],
    }
    payload.update(overrides)
    return payload


def blog_payload(**overrides):
    payload = {
        "title": "Buying Your First Home",
        "content": "A practical guide to the paperwork, budgeting and site visits involved in buying a first home. " * 2,
        "excerpt": "What to check before you sign",
        "published": True,
    }
    payload.update(overrides)
    return payload


def career_payload(**overrides):
    payload = {
        "name": "Asha Rao",
        "email": "Asha@Example.com",
        "whatsappNumber": "9876543210",
        "city": "Pune",
        "referralSource": "website",
        "resumeLink": "https://drive.google.com/file/d/abc/view",
    }
    payload.update(overrides)
    return payload


def enquiry_payload(**overrides):
    payload = {
        "name": "Ravi Kumar",
        "email": "ravi@example.com",
        "phone": "9123456789",
        "message": "I would like to schedule a site visit.",
    }
    payload.update(overrides)
    return payload
