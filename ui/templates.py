"""Jinja2 templates for the result area, the detail overlay and the page shell."""

from jinja2 import DictLoader, Environment, StrictUndefined

API_PREFIX = "/api/v1"

STATUS_TEMPLATE = """\
<p class="status{% if is_error %} status--error{% endif %}" role="{{ 'alert' if is_error else 'status' }}">{{ message }}</p>
"""

GRID_TEMPLATE = """\
{% for card in cards %}
<div class="movie-card" data-imdb-id="{{ card.imdb_id }}" tabindex="0">
  <img class="poster" src="{{ card.poster }}" alt="Poster for {{ card.title }}" loading="lazy">
  <div class="card-body">
    <h3 class="movie-title">{{ card.title }}</h3>
    <p class="movie-year">{{ card.year }}</p>
    <span class="rating-badge">&#11088; {{ card.rating }}</span>
  </div>
</div>
{% endfor %}
"""

DETAIL_TEMPLATE = """\
<div class="modal-bg" id="modalBg">
  <div class="modal" tabindex="0" data-imdb-id="{{ card.imdb_id }}">
    <img class="modal-poster" src="{{ card.poster }}" alt="Poster for {{ card.title }}">
    <div>
      <h2>{{ card.title }}</h2>
      <p><strong>Year:</strong> {{ card.year }}</p>
      <p><strong>Rating:</strong> &#11088; {{ card.rating }}</p>
      <p><strong>Genre:</strong> {{ card.genre }}</p>
      <p><strong>Plot:</strong> {{ card.plot }}</p>
      <button class="close-btn" data-action="close">Close</button>
    </div>
  </div>
</div>
"""

PAGE_TEMPLATE = """\
<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <title>{{ title }}</title>
</head>
<body data-background="{{ 'on' if background else 'off' }}" data-api="{{ api_prefix }}">
  <form class="search" id="searchForm" data-endpoint="{{ api_prefix }}/search">
    <input id="searchInput" name="query" type="text" placeholder="Search movies...">
    <button id="searchBtn" type="submit" disabled>Search</button>
  </form>
  <div id="movieList" data-mode="{{ mode }}">
{{ content }}
  </div>
{% if overlay %}{{ overlay }}{% endif %}
  <script>
    (() => {
      const api = document.body.dataset.api;
      const form = document.getElementById("searchForm");
      const input = document.getElementById("searchInput");
      const button = document.getElementById("searchBtn");

      // Every action hits the session API, then the page is served again
      const send = (method, path, body) =>
        fetch(api + path, {
          method,
          headers: {"Content-Type": "application/json"},
          body: body === undefined ? undefined : JSON.stringify(body),
        }).then(() => window.location.reload());

      // Blank input never reaches the server
      input.addEventListener("input", () => {
        button.disabled = input.value.trim() === "";
      });

      // Covers both the button click and Enter in the input
      form.addEventListener("submit", (event) => {
        event.preventDefault();
        const query = input.value.trim();
        if (query) {
          send("POST", "/search", {query});
        }
      });

      document.getElementById("movieList").addEventListener("click", (event) => {
        const card = event.target.closest(".movie-card");
        if (card) {
          send("POST", "/select/" + encodeURIComponent(card.dataset.imdbId));
        }
      });

      document.addEventListener("click", (event) => {
        if (event.target.closest("[data-action=close]")) {
          send("POST", "/dismiss");
        }
      });

      // Key presses only matter while the overlay is open
      document.addEventListener("keydown", (event) => {
        if (event.target === input || !document.getElementById("modalBg")) {
          return;
        }
        send("POST", "/keys", {key: event.key});
      });
    })();
  </script>
</body>
</html>
"""


def build_environment() -> Environment:
    """Autoescaping environment holding every template by name."""
    return Environment(
        loader=DictLoader(
            {
                "status.html": STATUS_TEMPLATE,
                "grid.html": GRID_TEMPLATE,
                "detail.html": DETAIL_TEMPLATE,
                "page.html": PAGE_TEMPLATE,
            }
        ),
        autoescape=True,
        undefined=StrictUndefined,
        trim_blocks=True,
        lstrip_blocks=True,
    )
