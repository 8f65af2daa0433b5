from external_links_api.app.core.security import create_access_token
# токен администратора для дашбордов; срок действия 365 дней (секунды)
token = create_access_token({"sub": "admin@ex.com", "user_id": 1, "role_id": 2}, expires_delta=365*24*60*60)
print(token)
