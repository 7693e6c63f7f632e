def inject_theme() -> str:
    return """
<style>
:root {
  --bg-a: #f5f7fb;
  --glass: rgba(255,255,255,0.78);
  --line: rgba(20,33,61,0.12);
  --text: #14213d;
}
.stApp {
  background: radial-gradient(circle at 12% 8%, var(--bg-a), #ffffff 52%);
}
.block-container {
  padding-top: 1.2rem;
  max-width: 1180px;
}
.hero {
  padding: 0.9rem 1.2rem;
  border: 1px solid var(--line);
  border-radius: 16px;
  background: var(--glass);
  color: var(--text);
  margin-bottom: 0.8rem;
}
.hero p { margin: 0.2rem 0 0 0; opacity: 0.7; }
@media (max-width: 900px) {
  .block-container { padding-top: 0.5rem; }
}
</style>
"""
