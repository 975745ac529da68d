"""Built-in project templates for the init command."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Template:
    """A project template offered by ``oxy init``."""

    name: str
    description: str
    kind: str
    dependencies: tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, object]:
        data: dict[str, object] = {"description": self.description, "type": self.kind}
        if self.dependencies:
            data["dependencies"] = list(self.dependencies)
        return data


TEMPLATES: dict[str, Template] = {
    template.name: template
    for template in (
        Template("basic", "Basic Rust binary project with enhanced Cargo.toml", "binary"),
        Template("binary", "Alias for basic template", "binary"),
        Template("library", "Rust library with documentation and tests", "library"),
        Template(
            "cli",
            "Command-line application with clap and tracing",
            "binary",
            ("clap", "anyhow", "tracing"),
        ),
        Template(
            "web-api",
            "Web API server using Axum framework",
            "binary",
            ("axum", "tokio", "tower", "serde"),
        ),
        Template("workspace", "Multi-crate workspace with core library and CLI", "workspace"),
    )
}

DEFAULT_TEMPLATE = "basic"

BASIC_MAIN_RS = """\
fn main() {
    println!("Hello, world! Welcome to {}!", env!("CARGO_PKG_NAME"));

    // Example: Reading command line arguments
    let args: Vec<String> = std::env::args().collect();
    if args.len() > 1 {
        println!("Arguments provided: {:?}", &args[1..]);
    }
}
"""

BASIC_PROFILES = """
[profile.release]
opt-level = 3
lto = true
codegen-units = 1
panic = "abort"

[profile.dev]
opt-level = 0
debug = true
"""

BASIC_README = """\
# {name}

A Rust project created with Oxygen.

## Quick Start

```bash
cargo run
```

## Build for Release

```bash
cargo build --release
```

## Development

```bash
# Run with automatic recompilation
cargo watch -x run

# Run tests
cargo test

# Check code quality
cargo clippy
cargo fmt
```
"""

LIBRARY_LIB_RS = """\
//! # {name}
//!
//! A description of what this library does.

/// A sample function that adds two numbers.
///
/// # Examples
///
/// ```
/// use {crate_name}::add;
///
/// let result = add(2, 3);
/// assert_eq!(result, 5);
/// ```
pub fn add(left: usize, right: usize) -> usize {{
    left + right
}}

/// A sample struct demonstrating library usage.
#[derive(Debug, Clone, PartialEq)]
pub struct Config {{
    pub name: String,
    pub version: String,
}}

impl Config {{
    /// Creates a new Config instance.
    pub fn new(name: String, version: String) -> Self {{
        Self {{ name, version }}
    }}
}}

#[cfg(test)]
mod tests {{
    use super::*;

    #[test]
    fn it_works() {{
        let result = add(2, 2);
        assert_eq!(result, 4);
    }}

    #[test]
    fn test_config() {{
        let config = Config::new("test".to_string(), "1.0.0".to_string());
        assert_eq!(config.name, "test");
        assert_eq!(config.version, "1.0.0");
    }}
}}
"""

CLI_CARGO_TOML = """\
[package]
name = "{name}"
version = "0.1.0"
edition = "2021"

[dependencies]
clap = {{ version = "4.0", features = ["derive"] }}
anyhow = "1.0"
tracing = "0.1"
tracing-subscriber = "0.3"

[profile.release]
opt-level = 3
lto = true
strip = true
"""

CLI_MAIN_RS = """\
use anyhow::Result;
use clap::{Parser, Subcommand};
use tracing::{info, Level};
use tracing_subscriber::fmt;

#[derive(Parser)]
#[command(name = env!("CARGO_PKG_NAME"))]
#[command(about = "A CLI application built with Rust")]
#[command(version)]
struct Cli {
    #[command(subcommand)]
    command: Commands,

    #[arg(short, long, help = "Enable verbose output")]
    verbose: bool,
}

#[derive(Subcommand)]
enum Commands {
    /// Say hello to someone
    Hello {
        /// Name of the person to greet
        #[arg(short, long, default_value = "World")]
        name: String,
    },
    /// Count something
    Count {
        /// Number to count to
        #[arg(short, long, default_value = "10")]
        number: u32,
    },
}

fn main() -> Result<()> {
    let cli = Cli::parse();

    let level = if cli.verbose { Level::DEBUG } else { Level::INFO };
    fmt().with_max_level(level).init();

    info!("Starting CLI application");

    match cli.command {
        Commands::Hello { name } => {
            println!("Hello, {}!", name);
            info!("Greeted {}", name);
        }
        Commands::Count { number } => {
            println!("Counting to {}:", number);
            for i in 1..=number {
                println!("  {}", i);
            }
            info!("Counted to {}", number);
        }
    }

    Ok(())
}
"""

WEB_API_CARGO_TOML = """\
[package]
name = "{name}"
version = "0.1.0"
edition = "2021"

[dependencies]
tokio = {{ version = "1.0", features = ["full"] }}
axum = "0.7"
tower = "0.4"
tower-http = {{ version = "0.5", features = ["cors", "trace"] }}
tracing = "0.1"
tracing-subscriber = {{ version = "0.3", features = ["env-filter"] }}
serde = {{ version = "1.0", features = ["derive"] }}
serde_json = "1.0"
anyhow = "1.0"
"""

WEB_API_MAIN_RS = """\
use axum::{
    extract::Path,
    http::StatusCode,
    response::Json,
    routing::{get, post},
    Router,
};
use serde::{Deserialize, Serialize};
use std::time::{SystemTime, UNIX_EPOCH};
use tower_http::{cors::CorsLayer, trace::TraceLayer};
use tracing::info;
use tracing_subscriber::{layer::SubscriberExt, util::SubscriberInitExt};

#[derive(Serialize, Deserialize)]
struct ApiResponse {
    message: String,
    timestamp: u64,
}

#[derive(Deserialize)]
struct CreateItem {
    name: String,
    description: Option<String>,
}

fn now() -> u64 {
    SystemTime::now()
        .duration_since(UNIX_EPOCH)
        .map(|d| d.as_secs())
        .unwrap_or(0)
}

#[tokio::main]
async fn main() -> anyhow::Result<()> {
    tracing_subscriber::registry()
        .with(
            tracing_subscriber::EnvFilter::try_from_default_env()
                .unwrap_or_else(|_| "info".into()),
        )
        .with(tracing_subscriber::fmt::layer())
        .init();

    let app = Router::new()
        .route("/", get(root))
        .route("/health", get(health_check))
        .route("/api/items", post(create_item))
        .route("/api/items/:id", get(get_item))
        .layer(TraceLayer::new_for_http())
        .layer(CorsLayer::permissive());

    let listener = tokio::net::TcpListener::bind("0.0.0.0:3000").await?;
    info!("Server running on http://0.0.0.0:3000");

    axum::serve(listener, app).await?;

    Ok(())
}

async fn root() -> Json<ApiResponse> {
    Json(ApiResponse { message: "Welcome to the API!".to_string(), timestamp: now() })
}

async fn health_check() -> Json<ApiResponse> {
    Json(ApiResponse { message: "OK".to_string(), timestamp: now() })
}

async fn create_item(Json(payload): Json<CreateItem>) -> Result<Json<ApiResponse>, StatusCode> {
    info!("Creating item: {}", payload.name);
    Ok(Json(ApiResponse { message: format!("Created item: {}", payload.name), timestamp: now() }))
}

async fn get_item(Path(id): Path<String>) -> Json<ApiResponse> {
    Json(ApiResponse { message: format!("Item ID: {}", id), timestamp: now() })
}
"""

WORKSPACE_CARGO_TOML = """\
[workspace]
members = [
    "crates/core",
    "crates/cli",
]
resolver = "2"

[workspace.package]
version = "0.1.0"
edition = "2021"
authors = ["Your Name <your.email@example.com>"]
license = "MIT OR Apache-2.0"

[workspace.dependencies]
anyhow = "1.0"
tokio = { version = "1.0", features = ["full"] }
tracing = "0.1"
tracing-subscriber = "0.3"
serde = { version = "1.0", features = ["derive"] }
clap = { version = "4.0", features = ["derive"] }
"""
